# leader belts.
# Common leaders are dealt from a shuffled cycle so every one of them shows up
# before any repeats. Rare leaders are mixed in by chance rather than at fixed
# intervals. The same leader is never served twice in a row.
import random
from typing import List, Optional

from booster_components.belts.belt import Belt, BeltKind, shuffled
from booster_components.card_utils.card import Card, Rarity, Variant

RARE_LEADER_PROBABILITY = 1 / 6


class LeaderBelt(Belt):
    kind = BeltKind.LEADER
    variant = Variant.NORMAL

    def _build_filling_pool(self) -> List[Card]:
        return self.catalog.leaders(self.variant, Rarity.COMMON, Rarity.RARE)

    def _prime(self) -> None:
        self.common_leaders = [c for c in self.filling_pool if c.rarity == Rarity.COMMON]
        self.rare_leaders = [c for c in self.filling_pool if c.rarity == Rarity.RARE]
        self.common_cycle: List[Card] = []
        self.cycle_index = 0
        self.last_leader_name: Optional[str] = None
        self._reshuffle()

    def _reshuffle(self) -> None:
        self.common_cycle = shuffled(self.common_leaders)
        self.cycle_index = 0
        self.fills += 1

    def _next_common(self) -> Optional[Card]:
        if not self.common_cycle:
            return None
        if self.cycle_index >= len(self.common_cycle):
            self._reshuffle()

        # swap the first acceptable leader into the cursor slot, nothing is skipped
        for j in range(self.cycle_index, len(self.common_cycle)):
            if self.common_cycle[j].name != self.last_leader_name:
                cycle = self.common_cycle
                cycle[self.cycle_index], cycle[j] = cycle[j], cycle[self.cycle_index]
                break

        leader = self.common_cycle[self.cycle_index]
        self.cycle_index += 1
        return leader

    def _random_rare(self) -> Optional[Card]:
        candidates = [c for c in self.rare_leaders if c.name != self.last_leader_name]
        return random.choice(candidates) if candidates else None

    def next(self) -> Optional[Card]:
        if not self.filling_pool:
            self._fill_if_needed()
            return None

        leader = None
        if self.rare_leaders and (not self.common_leaders or random.random() < RARE_LEADER_PROBABILITY):
            leader = self._random_rare()
        if leader is None:
            leader = self._next_common()
        if leader is None:
            return None

        self.last_leader_name = leader.name
        self.draws += 1
        return self._serve(leader)

    def peek(self, count: int = 1) -> List[Card]:
        """Upcoming common leaders. Rares are decided at draw time."""
        if not self.common_cycle:
            return []
        size = len(self.common_cycle)
        return [self._serve(self.common_cycle[(self.cycle_index + i) % size]) for i in range(min(count, size))]

    @property
    def size(self) -> int:
        return len(self.common_cycle) - self.cycle_index

    def status(self) -> dict:
        status = super().status()
        status["common_leaders"] = len(self.common_leaders)
        status["rare_leaders"] = len(self.rare_leaders)
        return status


class HyperspaceLeaderBelt(LeaderBelt):
    kind = BeltKind.HYPERSPACE_LEADER
    variant = Variant.HYPERSPACE


class ShowcaseLeaderBelt(Belt):
    kind = BeltKind.SHOWCASE_LEADER
    variant = Variant.SHOWCASE
    seam_size = 5
    seam_radius = 5

    def _build_filling_pool(self) -> List[Card]:
        leaders = self.catalog.leaders(self.variant)
        if self.catalog.config.set_number == 1:
            leaders = [c for c in leaders if c.rarity != Rarity.SPECIAL]
        return leaders
