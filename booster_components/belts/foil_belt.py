"""
Foil slot belts.

A foil boot is the filling pool expanded by print quantity per rarity and
shuffled flat, so a common is 54 times as likely as a legendary.
"""
from functools import cached_property
from typing import Dict, List

from booster_components.belts.belt import Belt, BeltKind, shuffled
from booster_components.card_utils.card import Card, Rarity, Variant

RARITY_QUANTITIES: Dict[Rarity, int] = {
    Rarity.COMMON: 54,
    Rarity.UNCOMMON: 18,
    Rarity.RARE: 6,
    Rarity.LEGENDARY: 1,
    Rarity.SPECIAL: 1,
}

LATE_SET_SPECIAL_QUANTITY = 6


class FoilBelt(Belt):
    kind = BeltKind.FOIL
    variant = Variant.NORMAL
    output_variant = Variant.FOIL
    seam_size = 0

    def include_special(self) -> bool:
        return self.catalog.config.special_in_foil_slot

    def _build_filling_pool(self) -> List[Card]:
        self.rarity_quantities = dict(RARITY_QUANTITIES)
        if self.catalog.config.set_number >= 4:
            self.rarity_quantities[Rarity.SPECIAL] = LATE_SET_SPECIAL_QUANTITY

        include_special = self.include_special()
        return [
            c for c in self.catalog.playables(self.variant)
            if include_special or c.rarity != Rarity.SPECIAL
        ]

    @cached_property
    def boot_size(self) -> int:
        return sum(self.rarity_quantities.get(c.rarity, 1) for c in self.filling_pool)

    @property
    def refill_threshold(self) -> int:
        return self.boot_size - 1

    def _build_boot(self) -> List[Card]:
        boot = []
        for card in self.filling_pool:
            boot.extend([card] * self.rarity_quantities.get(card.rarity, 1))
        return shuffled(boot)

    def status(self) -> dict:
        status = super().status()
        status["boot_size"] = self.boot_size
        return status


class HyperfoilBelt(FoilBelt):
    kind = BeltKind.HYPERFOIL
    variant = Variant.HYPERSPACE_FOIL
    output_variant = Variant.HYPERSPACE_FOIL

    def include_special(self) -> bool:
        return self.catalog.config.set_number >= 4
