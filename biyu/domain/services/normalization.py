"""Domain normalization helpers."""

from collections.abc import Iterable, Mapping

from biyu.domain.constants import (
    CREDIT_KINDS,
    DEBIT_KINDS,
    POSTED_STATUS,
    UNCATEGORIZED_CATEGORY_ID,
    UNCATEGORIZED_CATEGORY_NAME,
    UNKNOWN_CATEGORY_NAME,
)
from biyu.domain.models import Category


def normalize_category_name(name: str | None) -> str:
    """Return the identity key of a category name.

    Args:
        name: Raw category name.

    Returns:
        str: Trimmed, lowercased name ("" when missing).
    """
    if not name:
        return ""
    return name.strip().lower()


def normalize_kind(kind: str | None) -> str | None:
    """Map raw transaction kinds onto credit/debit.

    Args:
        kind: Raw kind value (credit, income, debit, expense...).

    Returns:
        str | None: "credit", "debit", or None for unknown kinds.
    """
    if not kind:
        return None
    cleaned = kind.strip().lower()
    if cleaned in CREDIT_KINDS:
        return "credit"
    if cleaned in DEBIT_KINDS:
        return "debit"
    return None


def is_posted(status: str | None) -> bool:
    """Return True when a transaction status counts toward totals.

    A missing status is treated as posted.
    """
    if status is None:
        return True
    cleaned = status.strip().lower()
    return not cleaned or cleaned == POSTED_STATUS


def normalize_joined_name(value) -> str | None:
    """Extract a name from a loosely shaped join result.

    Join results may arrive as a mapping, a list of mappings, a plain
    string, or nothing at all.

    Args:
        value: Raw joined value.

    Returns:
        str | None: Cleaned name, or None when no name is available.
    """
    if value is None:
        return None
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    if isinstance(value, Mapping):
        return normalize_joined_name(value.get("name"))
    if isinstance(value, (list, tuple)):
        for item in value:
            name = normalize_joined_name(item)
            if name:
                return name
    return None


class CategoryDirectory:
    """Lookup of categories keyed by logical identity.

    Rows sharing the same normalized name collapse into the first one seen;
    their ids become aliases of that canonical row.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        uncategorized_id: str = UNCATEGORIZED_CATEGORY_ID,
    ) -> None:
        self._uncategorized_id = uncategorized_id
        self._aliases: dict[str, str] = {}
        canonical_by_name: dict[str, Category] = {}
        seen_ids: set[str] = set()
        for category in categories:
            if category.id in seen_ids:
                continue
            seen_ids.add(category.id)
            key = normalize_category_name(category.name)
            if not key:
                continue
            canonical = canonical_by_name.setdefault(key, category)
            self._aliases[category.id] = canonical.id
        self._categories = sorted(
            canonical_by_name.values(),
            key=lambda item: (
                0 if item.id == uncategorized_id else 1,
                normalize_category_name(item.name),
            ),
        )
        self._names = {item.id: item.name.strip() for item in self._categories}

    @property
    def uncategorized_id(self) -> str:
        """Return the sentinel id used for uncategorized spending."""
        return self._uncategorized_id

    @property
    def categories(self) -> list[Category]:
        """Return canonical categories, sentinel first then by name."""
        return list(self._categories)

    def canonical_id(self, category_id: str | None) -> str:
        """Resolve a raw category id to its canonical id.

        Args:
            category_id: Raw id from a transaction or limit row.

        Returns:
            str: Canonical id, the sentinel for missing ids, or the raw id
            when it is unknown.
        """
        if category_id is None:
            return self._uncategorized_id
        raw = str(category_id).strip()
        if not raw or raw == self._uncategorized_id:
            return self._uncategorized_id
        return self._aliases.get(raw, raw)

    def name_for(self, category_id: str | None) -> str:
        """Return the display name for a raw or canonical category id."""
        resolved = self.canonical_id(category_id)
        if resolved == self._uncategorized_id:
            return self._names.get(resolved, UNCATEGORIZED_CATEGORY_NAME)
        return self._names.get(resolved, UNKNOWN_CATEGORY_NAME)


__all__ = [
    "normalize_category_name",
    "normalize_kind",
    "is_posted",
    "normalize_joined_name",
    "CategoryDirectory",
]
