"""Client-side catalogue filter.

Narrows the full product listing by free-text search and category. The
result is recomputed from scratch on every call; the catalogue is small and
the cost is linear in its size.
"""

from catalogue.product.product import ProductCategory

CATEGORY_ALL = "all"

# Display labels, in the order the category selector shows them
CATEGORY_LABELS: dict[str, str] = {
    CATEGORY_ALL: "All Products",
    ProductCategory.VEGETABLES.value: "Vegetables",
    ProductCategory.FISH.value: "Fresh Fish",
    ProductCategory.FROZEN.value: "Frozen Food",
    ProductCategory.SPICES.value: "Kitchen Spices",
}


def _matches_search(product, needle: str) -> bool:
    if not needle:
        return True
    name = (product.name or "").lower()
    description = (product.description or "").lower()
    return needle in name or needle in description


def _matches_category(product, category: str) -> bool:
    return category == CATEGORY_ALL or product.category == category


def filter_catalogue(products, search_text: str = "", category: str = CATEGORY_ALL) -> list:
    """Return the products matching ``search_text`` and ``category``, in input order.

    ``search_text`` is a case-insensitive substring of the name or the
    description; empty text matches everything. ``category`` is either
    ``"all"`` or an exact category value.
    """
    needle = (search_text or "").lower()
    category = category or CATEGORY_ALL
    return [p for p in products if _matches_search(p, needle) and _matches_category(p, category)]
