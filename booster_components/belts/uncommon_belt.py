from typing import List

from booster_components.belts.belt import Belt, BeltKind
from booster_components.card_utils.card import Card, Rarity, Variant


class UncommonBelt(Belt):
    """One belt serves all three uncommon slots of a pack."""
    kind = BeltKind.UNCOMMON
    variant = Variant.NORMAL
    rarity = Rarity.UNCOMMON
    seam_size = 4
    seam_radius = 4

    def _build_filling_pool(self) -> List[Card]:
        return self.catalog.playables(self.variant, self.rarity)


class HyperspaceUncommonBelt(UncommonBelt):
    kind = BeltKind.HYPERSPACE_UNCOMMON
    variant = Variant.HYPERSPACE


class HyperspaceCommonBelt(UncommonBelt):
    kind = BeltKind.HYPERSPACE_COMMON
    variant = Variant.HYPERSPACE
    rarity = Rarity.COMMON
    seam_size = 5
    seam_radius = 5
