"""Shared catalog fixtures."""

from pathlib import Path

import pytest

from alchemy_solver.integration.io import build_catalog, load_catalog

SAMPLE_CATALOG = Path(__file__).parent.parent / "data" / "elements.json"


def tier_group(tier, **elements):
    """Tier group in scraper layout; keyword values are recipe lists."""
    return {
        'tierNum': tier,
        'elements': [
            {'name': name, 'recipes': [list(r) for r in recipes], 'imageUrl': f"{name.lower()}.svg"}
            for name, recipes in elements.items()
        ],
    }


@pytest.fixture
def chain_groups():
    """A, B basic; C = A + B; D = A + C."""
    return [
        tier_group(0, A=[], B=[]),
        tier_group(1, C=[('A', 'B')]),
        tier_group(2, D=[('A', 'C')]),
    ]


@pytest.fixture
def chain_catalog(chain_groups):
    return build_catalog(chain_groups)


@pytest.fixture
def branching_catalog():
    """D has three recipes: A + C, B + C and E + F."""
    return build_catalog([
        tier_group(0, A=[], B=[]),
        tier_group(1, C=[('A', 'B')], E=[('A', 'A')], F=[('B', 'B')]),
        tier_group(2, D=[('A', 'C'), ('B', 'C'), ('E', 'F')]),
    ])


@pytest.fixture
def dead_end_catalog():
    """The first branch from A (X, then Y) never leads to T."""
    return build_catalog([
        tier_group(0, A=[], B=[]),
        tier_group(1, X=[('A', 'A')], C=[('A', 'B')]),
        tier_group(2, Y=[('X', 'X')], T=[('C', 'A')]),
    ])


@pytest.fixture
def unreachable_catalog():
    """Z has no recipe, so D = A + Z cannot be made; G uses a same-tier ingredient."""
    return build_catalog([
        tier_group(0, A=[], B=[]),
        tier_group(1, C=[('A', 'B')], Z=[], G=[('A', 'C')]),
        tier_group(2, D=[('A', 'Z')], Orphan=[]),
    ])


@pytest.fixture
def sample_catalog():
    return load_catalog(SAMPLE_CATALOG)


@pytest.fixture
def two_branch_catalog():
    """T = X + Y, where X and Y are both made elements."""
    return build_catalog([
        tier_group(0, A=[], B=[]),
        tier_group(1, X=[('A', 'B')], Y=[('A', 'A')]),
        tier_group(2, T=[('X', 'Y')]),
    ])


@pytest.fixture
def shortcut_catalog():
    """T = X + Y or A + Y; the second recipe needs one combination less."""
    return build_catalog([
        tier_group(0, A=[], B=[]),
        tier_group(1, X=[('A', 'B')], Y=[('A', 'A')]),
        tier_group(2, T=[('X', 'Y'), ('A', 'Y')]),
    ])
