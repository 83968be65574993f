"""Pure functions for normalizing category records.

The backend is inconsistent about key casing (``id``/``ID``/``id_category``,
``name``/``Nombre``...). All knowledge of those aliases lives here so that
shape drift only touches this module.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from lana.domain.models import CategoryId, CategoryName

# Candidate keys in priority order
ID_KEYS: tuple[str, ...] = ("id", "ID", "Id", "id_category", "idCategory")
NAME_KEYS: tuple[str, ...] = ("name", "Nombre", "nombre")


@dataclass(frozen=True)
class Category:
    """Immutable normalized category."""

    id: CategoryId
    name: CategoryName


@dataclass(frozen=True)
class CategoryLookup:
    """Bidirectional lookup maps built from a normalized category list.

    ``id_to_name`` is keyed by the string form of the id because the backend
    mixes numeric and string ids for the same category.
    """

    name_to_id: dict[CategoryName, CategoryId]
    id_to_name: dict[str, CategoryName]


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the value of the first key present with a non-None value.

    Args:
        record: Raw record.
        keys: Candidate keys in priority order.

    Returns:
        The first non-None value, or None if no key matched.
    """
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def extract_category_id(record: Mapping[str, Any]) -> CategoryId | None:
    """Extract the category id from a raw record using the known aliases."""
    return first_present(record, ID_KEYS)


def normalize_category(record: Any) -> Category | None:
    """Normalize a single raw category record.

    Args:
        record: Raw category record from the API.

    Returns:
        Category, or None if the record has no usable id.
    """
    if not isinstance(record, Mapping):
        return None

    category_id = extract_category_id(record)
    if category_id is None:
        return None

    name = first_present(record, NAME_KEYS)
    if name is None:
        name = str(category_id)

    return Category(id=category_id, name=CategoryName(str(name)))


def normalize_categories(raw: Any) -> list[Category]:
    """Normalize a raw category list into uniform Category records.

    Records without an id are dropped. Anything that is not a list yields an
    empty result.

    Args:
        raw: Decoded JSON from the categories endpoint.

    Returns:
        List of normalized categories in source order.
    """
    if not isinstance(raw, list):
        return []

    categories: list[Category] = []
    for record in raw:
        category = normalize_category(record)
        if category is not None:
            categories.append(category)
    return categories


def build_lookup(categories: Iterable[Category]) -> CategoryLookup:
    """Build name->id and id->name maps (last write wins on duplicates).

    Args:
        categories: Normalized categories.

    Returns:
        CategoryLookup with both maps.
    """
    name_to_id: dict[CategoryName, CategoryId] = {}
    id_to_name: dict[str, CategoryName] = {}

    for category in categories:
        name_to_id[category.name] = category.id
        id_to_name[str(category.id)] = category.name

    return CategoryLookup(name_to_id=name_to_id, id_to_name=id_to_name)


def placeholder_name(category_id: CategoryId | None) -> CategoryName:
    """Display name for a category id that cannot be resolved."""
    return CategoryName(f"Cat {category_id}")


def category_label(category_id: CategoryId | None, id_to_name: Mapping[str, CategoryName]) -> CategoryName:
    """Resolve a category id to its display name.

    Args:
        category_id: Category id as found on a transaction or budget.
        id_to_name: Map from CategoryLookup.

    Returns:
        The category name, or the "Cat <id>" placeholder.
    """
    name = id_to_name.get(str(category_id))
    if name is None:
        return placeholder_name(category_id)
    return name


def find_category(categories: Iterable[Category], category_id: CategoryId | None) -> Category | None:
    """Find a category by id, comparing ids by their string form."""
    if category_id is None:
        return None
    wanted = str(category_id)
    for category in categories:
        if str(category.id) == wanted:
            return category
    return None


def resolve_category_ref(ref: str, lookup: CategoryLookup) -> CategoryId | None:
    """Resolve user input naming a category to its id.

    Exact names win, then case-insensitive names, then ids.

    Args:
        ref: Category name or id as typed by the user.
        lookup: Lookup maps for the current category list.

    Returns:
        Category id, or None if nothing matches.
    """
    ref = ref.strip()
    if not ref:
        return None

    if ref in lookup.name_to_id:
        return lookup.name_to_id[CategoryName(ref)]

    folded = ref.casefold()
    for name, category_id in lookup.name_to_id.items():
        if name.casefold() == folded:
            return category_id

    if ref in lookup.id_to_name:
        for category_id in lookup.name_to_id.values():
            if str(category_id) == ref:
                return category_id
        return int(ref) if ref.isdigit() else ref

    return None
