"""
Tests for the leader belts.
"""

from booster_components.belts.leader_belt import HyperspaceLeaderBelt, LeaderBelt
from booster_components.card_utils.card import Rarity
from booster_components.card_utils.catalog import CardCatalog
from booster_components.utils.set_configs import make_set_config

from conftest import make_card


def leaders(belt, count):
    return [belt.next() for _ in range(count)]


class TestLeaderBelt:
    """Common cycle with rares mixed in."""

    def test_pools(self, catalog):
        belt = LeaderBelt(catalog)
        assert len(belt.common_leaders) == 8
        assert len(belt.rare_leaders) == 10
        assert all(c.is_leader for c in belt.filling_pool)

    def test_no_back_to_back_repeats(self, catalog):
        served = leaders(LeaderBelt(catalog), 2000)
        assert all(a.name != b.name for a, b in zip(served, served[1:]))

    def test_every_common_once_before_any_repeat(self, catalog):
        served = leaders(LeaderBelt(catalog), 1200)
        commons = [c.name for c in served if c.rarity == Rarity.COMMON]
        cycles = [commons[i:i + 8] for i in range(0, len(commons) - 7, 8)]
        assert len(cycles) > 50
        assert all(len(set(cycle)) == 8 for cycle in cycles)

    def test_rare_rate_is_about_one_in_six(self, catalog):
        served = leaders(LeaderBelt(catalog), 3000)
        rare_share = sum(1 for c in served if c.rarity == Rarity.RARE) / len(served)
        assert 0.13 <= rare_share <= 0.20

    def test_size_counts_commons_left_in_cycle(self, catalog):
        belt = LeaderBelt(catalog)
        assert belt.size == 8
        while belt.next().rarity != Rarity.COMMON:
            pass
        assert belt.size == 7

    def test_peek_previews_upcoming_commons(self, catalog):
        belt = LeaderBelt(catalog)
        preview = belt.peek(3)
        assert len(preview) == 3
        assert all(c.rarity == Rarity.COMMON for c in preview)

    def test_repeat_at_cycle_boundary_is_swapped_forward(self):
        cards = [make_card("TWO", i, f"Leader {i}", Rarity.COMMON, "Leader") for i in range(2)]
        belt = LeaderBelt(CardCatalog(cards, make_set_config("TWO", 1)))
        served = [c.name for c in leaders(belt, 40)]
        assert all(a != b for a, b in zip(served, served[1:]))
        assert sorted(served[:2]) == ["Leader 0", "Leader 1"]

    def test_rares_only(self):
        cards = [make_card("RAR", i, f"Rare Leader {i}", Rarity.RARE, "Leader") for i in range(3)]
        belt = LeaderBelt(CardCatalog(cards, make_set_config("RAR", 1)))
        served = leaders(belt, 30)
        assert all(c is not None for c in served)
        assert all(a.name != b.name for a, b in zip(served, served[1:]))

    def test_empty_pool(self):
        belt = LeaderBelt(CardCatalog([], make_set_config("EMP", 1)))
        assert belt.next() is None
        assert belt.peek(2) == []


def test_hyperspace_leader_belt(catalog):
    served = leaders(HyperspaceLeaderBelt(catalog), 100)
    assert all(c.is_leader and c.is_hyperspace for c in served)
    assert all(a.name != b.name for a, b in zip(served, served[1:]))
