"""Use cases to read accounts and categories for presentation layers."""

from biyu.application.ports.ledger_repository import LedgerRepositoryPort
from biyu.domain.constants import UNCATEGORIZED_CATEGORY_ID
from biyu.domain.models import Account, Category, SessionContext
from biyu.domain.services.normalization import CategoryDirectory


class GetAccountsUseCase:
    """Fetch the accounts of the session owner."""

    def __init__(self, ledger_repository: LedgerRepositoryPort) -> None:
        """Initialize the use case with its required dependencies."""
        self._ledger_repository = ledger_repository

    def execute(self, session: SessionContext) -> list[Account]:
        """Return the owner's accounts ordered by name."""
        accounts = self._ledger_repository.fetch_accounts(session.owner_id)
        return sorted(accounts, key=lambda account: account.name.lower())


class ListCategoriesUseCase:
    """Fetch the owner's categories with duplicates collapsed."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
    ) -> None:
        """Initialize the use case with its required dependencies."""
        self._ledger_repository = ledger_repository
        self._uncategorized_id = uncategorized_id

    def execute(self, session: SessionContext) -> list[Category]:
        """Return canonical categories, uncategorized first then by name."""
        categories = self._ledger_repository.fetch_categories(
            session.owner_id
        )
        directory = CategoryDirectory(
            categories,
            uncategorized_id=self._uncategorized_id,
        )
        return directory.categories


__all__ = ["GetAccountsUseCase", "ListCategoriesUseCase"]
