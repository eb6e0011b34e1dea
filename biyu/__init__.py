"""BiYú personal finance dashboard."""
