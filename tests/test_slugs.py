import re

import pytest

from shopcommon.slugs import slugify

SLUG_SHAPE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Wireless Bluetooth Headphones", "wireless-bluetooth-headphones"),
        ("Organic Cotton T-Shirt", "organic-cotton-t-shirt"),
        ("Home & Kitchen Set", "home-kitchen-set"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("Multi---Dash -- Name", "multi-dash-name"),
        ("-Edge-", "edge"),
        ("Crème Brûlée", "crme-brle"),
        ("100% Cotton", "100-cotton"),
    ],
)
def test_slugify_examples(name, expected):
    assert slugify(name) == expected


@pytest.mark.parametrize("name", ["", "!!!", "&&", "---"])
def test_slugify_may_be_empty(name):
    assert slugify(name) == ""


@pytest.mark.parametrize(
    "name",
    ["Yoga Mat", "Coffee Maker Pro 2000", "  a\tb\nc  ", "Sports & Fitness -- Gear"],
)
def test_slug_shape_and_idempotence(name):
    slug = slugify(name)
    assert SLUG_SHAPE.match(slug)
    assert slugify(slug) == slug
    assert slugify(name) == slug
