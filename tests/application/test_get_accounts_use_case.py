"""Tests for the GetAccountsUseCase and ListCategoriesUseCase."""

from unittest.mock import MagicMock

from biyu.application.use_cases.get_accounts import (
    GetAccountsUseCase,
    ListCategoriesUseCase,
)
from biyu.domain.models import Account, Category, SessionContext


def test_execute_returns_accounts_sorted_by_name() -> None:
    repository = MagicMock()
    repository.fetch_accounts.return_value = [
        Account(id="b", owner_id="o", name="savings", currency_code="COP"),
        Account(id="a", owner_id="o", name="Checking", currency_code="COP"),
    ]

    result = GetAccountsUseCase(repository).execute(SessionContext("o"))

    assert [account.id for account in result] == ["a", "b"]
    repository.fetch_accounts.assert_called_once_with("o")


def test_list_categories_collapses_duplicates() -> None:
    repository = MagicMock()
    repository.fetch_categories.return_value = [
        Category(id="2", owner_id="o", name="Transport"),
        Category(id="1", owner_id="o", name="Food"),
        Category(id="3", owner_id="o", name="food"),
        Category(id="u", owner_id="o", name="Uncategorized"),
    ]

    result = ListCategoriesUseCase(repository, uncategorized_id="u").execute(
        SessionContext("o")
    )

    assert [category.id for category in result] == ["u", "1", "2"]
