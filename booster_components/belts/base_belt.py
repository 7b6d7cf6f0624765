import random
from typing import List

from booster_components.belts.belt import Belt, BeltKind, shuffled
from booster_components.card_utils.card import Card, Rarity, Variant


class BaseBelt(Belt):
    """Common bases. Neighbouring bases should not share an aspect."""
    kind = BeltKind.BASE
    variant = Variant.NORMAL
    seam_size = 0

    def _build_filling_pool(self) -> List[Card]:
        return self.catalog.bases(self.variant, Rarity.COMMON)

    def _build_boot(self) -> List[Card]:
        boot = shuffled(self.filling_pool)
        prev = self.hopper[-1] if self.hopper else None

        for i in range(len(boot)):
            if prev is not None and boot[i].shares_aspect(prev):
                # trade places with something from the back half of what's left
                back_half = (len(boot) - i - 1) // 2 + i + 1
                if back_half < len(boot):
                    swap = random.randrange(back_half, len(boot))
                    boot[i], boot[swap] = boot[swap], boot[i]
            prev = boot[i]

        return boot


class HyperspaceBaseBelt(BaseBelt):
    kind = BeltKind.HYPERSPACE_BASE
    variant = Variant.HYPERSPACE
