"""
Common belts.

Each set runs two disjoint common belts, A and B. A pack takes a fixed
window of `draw_size` cards from each, and every such window has to contain
the belt's required aspects. That is arranged while the boot is built, never
patched afterwards:

* cards carrying a required aspect are spread evenly over the boot,
* the cards still in the hopper at refill time (the seam) are taken into
  account so a window straddling two boots is covered as well,
* the last twelve cards served, and the seam itself, are kept out of the
  next boot.
"""
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from booster_components.belts.belt import Belt, BeltKind, shuffled
from booster_components.card_utils.card import Aspect, Card
from booster_components.card_utils.catalog import CardCatalog
from booster_components.utils.set_configs import Block

COMMON_DEDUP_WINDOW = 12


@dataclass(frozen=True)
class SegmentConfig:
    draw_size: int
    required_aspects: Tuple[Aspect, ...]


SEGMENT_CONFIGS: Dict[Tuple[Block, str], SegmentConfig] = {
    (Block.ZERO, "A"): SegmentConfig(6, (Aspect.VIGILANCE, Aspect.COMMAND, Aspect.AGGRESSION)),
    (Block.ZERO, "B"): SegmentConfig(3, (Aspect.CUNNING,)),
    (Block.A, "A"): SegmentConfig(4, (Aspect.VIGILANCE, Aspect.COMMAND)),
    (Block.A, "B"): SegmentConfig(4, (Aspect.AGGRESSION, Aspect.CUNNING)),
}


def build_constrained_boot(cards: Sequence[Card], draw_size: int, required_aspects: Sequence[Aspect],
                           excluded_ids: Iterable[str] = (), seam_cards: Sequence[Card] = ()) -> List[Card]:
    """
    Arrange `cards` so that any `draw_size` consecutive cards carry every
    aspect in `required_aspects`.

    :param cards: the belt's filling pool
    :param draw_size: cards drawn from this belt per pack
    :param required_aspects: aspects each window must contain
    :param excluded_ids: ids kept out of this boot (recently served cards)
    :param seam_cards: cards still in the hopper, drawn before this boot
    """
    excluded = set(excluded_ids)
    available = [c for c in cards if c.id not in excluded]
    if not required_aspects or not available:
        return shuffled(available)

    size = len(available)
    by_aspect: Dict[Aspect, List[Card]] = {a: [] for a in required_aspects}
    for card in available:
        for aspect in required_aspects:
            if card.has_aspect(aspect):
                by_aspect[aspect].append(card)
    for pool in by_aspect.values():
        random.shuffle(pool)

    boot: List[Optional[Card]] = [None] * size
    used: Set[str] = set()

    # head of the boot completes the window that starts in the seam
    if 0 < len(seam_cards) < draw_size:
        covered = {a for c in seam_cards for a in c.aspects}
        missing = [a for a in required_aspects if a not in covered]
        head = draw_size - len(seam_cards)
        pos = 0
        for aspect in missing:
            if pos >= head:
                break
            card = next((c for c in by_aspect[aspect] if c.id not in used), None)
            if card is not None:
                boot[pos] = card
                used.add(card.id)
                pos += 1

    # staggered, evenly spaced placement per aspect
    for aspect_index, aspect in enumerate(required_aspects):
        pool = [c for c in by_aspect[aspect] if c.id not in used]
        if not pool:
            continue
        spacing = size / len(pool)
        offset = int(aspect_index * spacing / len(required_aspects))
        for i, card in enumerate(pool):
            target = int(i * spacing + offset) % size
            probes = 0
            while boot[target] is not None and probes < size:
                target = (target + 1) % size
                probes += 1
            if boot[target] is None:
                boot[target] = card
                used.add(card.id)

    leftovers = shuffled([c for c in available if c.id not in used])
    for i in range(size):
        if boot[i] is None and leftovers:
            boot[i] = leftovers.pop()

    return [c for c in boot if c is not None]


class CommonBelt(Belt):
    def __init__(self, catalog: CardCatalog, belt_id: str = "A"):
        self.belt_id = belt_id
        self.kind = BeltKind.COMMON_A if belt_id == "A" else BeltKind.COMMON_B
        self.segment = SEGMENT_CONFIGS[(catalog.config.block, belt_id)]
        self.recent_ids: Deque[str] = deque(maxlen=COMMON_DEDUP_WINDOW)
        super().__init__(catalog)

    def _build_filling_pool(self) -> List[Card]:
        return self.catalog.common_belt_cards(self.belt_id)

    @property
    def refill_threshold(self) -> int:
        # refill when exactly one pack's worth (or less) is left
        return self.segment.draw_size

    def fill(self) -> None:
        seam_cards = list(self.hopper)
        excluded_ids = set(self.recent_ids) | {c.id for c in seam_cards}

        boot = build_constrained_boot(
            self.filling_pool,
            self.segment.draw_size,
            self.segment.required_aspects,
            excluded_ids=excluded_ids,
            seam_cards=seam_cards,
        )
        if not boot:
            # pool too small to honour the memory
            boot = build_constrained_boot(self.filling_pool, self.segment.draw_size,
                                          self.segment.required_aspects)

        self.hopper.extend(boot)
        self.fills += 1

    def next(self) -> Optional[Card]:
        card = super().next()
        if card is not None:
            self.recent_ids.append(card.id)
        return card

    def status(self) -> dict:
        status = super().status()
        status["draw_size"] = self.segment.draw_size
        return status
