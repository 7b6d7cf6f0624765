"""
Pytest configuration and fixtures.
Provides a synthetic card catalog shaped like a real set.
"""

import os
os.environ.setdefault("ENV", "test")

import pytest
from typing import List

from booster_components.belts.belt_cache import GenerationSession
from booster_components.card_utils.card import Aspect, Card, Rarity, Variant, LEADER, BASE
from booster_components.card_utils.catalog import CardCatalog, CatalogRegistry
from booster_components.utils.set_configs import make_set_config


COLORS = [Aspect.VIGILANCE, Aspect.COMMAND, Aspect.AGGRESSION, Aspect.CUNNING]
SIDES = [Aspect.HEROISM, Aspect.VILLAINY]


# ============================================================================
# HELPERS: card construction
# ============================================================================

def make_card(set_code, number, name, rarity, type_="Unit", aspects=(), variant=Variant.NORMAL, suffix=""):
    return Card(
        id=f"{set_code}-{number:03d}{suffix}",
        name=name,
        set_code=set_code,
        rarity=rarity,
        type=type_,
        aspects=tuple(aspects),
        variant_type=variant,
    )


def normal_cards(set_code: str) -> List[Card]:
    """
    Normal prints for one set:

    - 8 common + 10 rare leaders
    - 12 common bases, three per color
    - 90 commons: 18 each Vigilance / Command / Aggression, 24 Cunning,
      6 mono-Heroism and 6 mono-Villainy
    - 60 uncommons, 48 rares, 16 legendaries, 8 specials
    """
    cards = []
    number = iter(range(1, 1000))

    def add(name, rarity, type_="Unit", aspects=()):
        cards.append(make_card(set_code, next(number), name, rarity, type_, aspects))

    for i in range(8):
        add(f"Common Leader {i}", Rarity.COMMON, LEADER, (COLORS[i % 4], SIDES[i % 2]))
    for i in range(10):
        add(f"Rare Leader {i}", Rarity.RARE, LEADER, (COLORS[i % 4], SIDES[i % 2]))

    for i in range(12):
        add(f"Base {i}", Rarity.COMMON, BASE, (COLORS[i % 4],))

    for color, count in zip(COLORS, (18, 18, 18, 24)):
        for i in range(count):
            add(f"{color.value} Common {i}", Rarity.COMMON, aspects=(color, SIDES[i % 2]))
    for side in SIDES:
        for i in range(6):
            add(f"{side.value} Common {i}", Rarity.COMMON, aspects=(side,))

    for rarity, count in ((Rarity.UNCOMMON, 60), (Rarity.RARE, 48), (Rarity.LEGENDARY, 16), (Rarity.SPECIAL, 8)):
        for i in range(count):
            add(f"{rarity.value} {i}", rarity, aspects=(COLORS[i % 4], SIDES[i % 2]))

    return cards


def with_variant_prints(cards: List[Card]) -> List[Card]:
    """Hyperspace print for everything, Hyperspace Foil for playables, Showcase for leaders."""
    prints = list(cards)
    for card in cards:
        prints.append(card.model_copy(update={"id": card.id + "-HS", "variant_type": Variant.HYPERSPACE}))
        if card.is_playable:
            prints.append(card.model_copy(update={"id": card.id + "-HSF", "variant_type": Variant.HYPERSPACE_FOIL}))
        if card.is_leader:
            prints.append(card.model_copy(update={"id": card.id + "-SC", "variant_type": Variant.SHOWCASE}))
    return prints


def build_catalog(set_code="TST", set_number=1, variant_prints=True, **config_overrides) -> CardCatalog:
    cards = normal_cards(set_code)
    if variant_prints:
        cards = with_variant_prints(cards)
    config = make_set_config(set_code, set_number, f"Test Set {set_number}", **config_overrides)
    return CardCatalog(cards, config)


def registry_for(*catalogs: CardCatalog) -> CatalogRegistry:
    registry = CatalogRegistry()
    for catalog in catalogs:
        registry.add(catalog)
    return registry


# ============================================================================
# FIXTURES: catalogs and sessions
# ============================================================================

@pytest.fixture
def catalog_factory():
    """Build a synthetic catalog. Accepts set_code, set_number and SetConfig overrides."""
    return build_catalog


@pytest.fixture
def catalog():
    """Block 0 set (set number 1)."""
    return build_catalog("TST", 1)


@pytest.fixture
def block_a_catalog():
    """Block A set (set number 4)."""
    return build_catalog("TSA", 4)


@pytest.fixture
def registry(catalog, block_a_catalog):
    return registry_for(catalog, block_a_catalog)


@pytest.fixture
def session(registry):
    return GenerationSession(registry)
