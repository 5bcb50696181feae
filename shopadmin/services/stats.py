"""Derived statistics and listing helpers over a product snapshot.

All functions are pure and recompute their result on every call.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence

from shopadmin.models import DashboardStats, Product

LOW_STOCK_THRESHOLD = 10


def total_count(products: Sequence[Product]) -> int:
    return len(products)


def low_stock(products: Iterable[Product], threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
    return [product for product in products if product.inventory < threshold]


def total_value(products: Iterable[Product]) -> float:
    return sum((product.price * product.inventory for product in products), 0.0)


def distinct_categories(products: Iterable[Product]) -> list[str]:
    """Unique categories in the order they first appear."""

    return list(dict.fromkeys(product.category for product in products))


def products_by_category(products: Iterable[Product], category: str) -> list[Product]:
    return [product for product in products if product.category == category]


def category_counts(products: Iterable[Product]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return counts


def dashboard_stats(
    products: Sequence[Product],
    threshold: int = LOW_STOCK_THRESHOLD,
) -> DashboardStats:
    return DashboardStats(
        total_products=total_count(products),
        low_stock_items=len(low_stock(products, threshold)),
        total_value=total_value(products),
        categories=distinct_categories(products),
    )


def filter_products(
    products: Iterable[Product],
    query: str = "",
    category: str = "",
) -> list[Product]:
    """Apply the storefront search box and category dropdown.

    ``query`` matches case-insensitively against name, description and
    category; ``category`` must match exactly. Blank values do not filter.
    """

    needle = (query or "").strip().lower()
    wanted = (category or "").strip()
    matches: list[Product] = []
    for product in products:
        if wanted and product.category != wanted:
            continue
        if needle:
            haystack = " ".join((product.name, product.description, product.category)).lower()
            if needle not in haystack:
                continue
        matches.append(product)
    return matches


def recommend(
    products: Iterable[Product],
    limit: int = 6,
    rng: Optional[random.Random] = None,
) -> list[Product]:
    """Pick up to ``limit`` products in random order."""

    pool = list(products)
    (rng or random.Random()).shuffle(pool)
    return pool[: max(0, limit)]
