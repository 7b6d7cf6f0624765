# rare/legendary belt.
# One fill is `ratio` segments. Every segment holds all of the rares plus its
# own slice of the legendaries, so per fill each rare appears `ratio` times and
# each legendary once.
from typing import List

from booster_components.belts.belt import Belt, BeltKind, shuffled
from booster_components.card_utils.card import Card, Rarity, Variant


class RareLegendaryBelt(Belt):
    kind = BeltKind.RARE_LEGENDARY
    variant = Variant.NORMAL
    seam_size = 5
    seam_radius = 6

    def _build_filling_pool(self) -> List[Card]:
        self.ratio = self.catalog.config.rare_legendary_ratio
        self.rares = self.catalog.playables(self.variant, Rarity.RARE)
        self.legendaries = self.catalog.playables(self.variant, Rarity.LEGENDARY)
        return self.rares + self.legendaries

    def fill(self) -> None:
        legendaries = shuffled(self.legendaries)
        count = len(legendaries)
        for i in range(self.ratio):
            # near-equal slices, sizes differ by at most one
            chunk = legendaries[i * count // self.ratio:(i + 1) * count // self.ratio]
            segment = shuffled(self.rares + chunk)
            if segment:
                self._append_boot(segment)

    def status(self) -> dict:
        status = super().status()
        status["ratio"] = self.ratio
        return status


class HyperspaceRareLegendaryBelt(RareLegendaryBelt):
    kind = BeltKind.HYPERSPACE_RARE_LEGENDARY
    variant = Variant.HYPERSPACE
