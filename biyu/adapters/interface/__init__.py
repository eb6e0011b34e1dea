"""Presentation adapters for the dashboard."""

__all__ = []
