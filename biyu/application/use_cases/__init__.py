"""Application use cases package."""

from .bootstrap_owner import BootstrapOwnerUseCase
from .get_accounts import GetAccountsUseCase, ListCategoriesUseCase
from .get_dashboard_summary import (
    DashboardSummary,
    GetDashboardSummaryUseCase,
)
from .manage_budget import ManageBudgetUseCase
from .manage_transactions import ManageTransactionsUseCase

__all__ = [
    "BootstrapOwnerUseCase",
    "GetAccountsUseCase",
    "ListCategoriesUseCase",
    "DashboardSummary",
    "GetDashboardSummaryUseCase",
    "ManageBudgetUseCase",
    "ManageTransactionsUseCase",
]
