"""
Generic belt machinery.

A belt mimics a print-run conveyor: a fixed filling pool is shuffled into
"boots" that are appended to a hopper, and pack slots are served from the
front of the hopper. Refilling happens before the hopper runs dry so that the
join between two boots (the seam) can be checked for near duplicates.
"""
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional, Sequence

from booster_components.card_utils.card import Card, Variant
from booster_components.card_utils.catalog import CardCatalog
from booster_logs.loggers import belt_logger

MAX_SEAM_DEDUP_ATTEMPTS = 10


class BeltKind(str, Enum):
    LEADER = "leader"
    BASE = "base"
    COMMON_A = "common_a"
    COMMON_B = "common_b"
    UNCOMMON = "uncommon"
    RARE_LEGENDARY = "rare_legendary"
    FOIL = "foil"
    HYPERSPACE_LEADER = "hyperspace_leader"
    SHOWCASE_LEADER = "showcase_leader"
    HYPERSPACE_BASE = "hyperspace_base"
    HYPERSPACE_COMMON = "hyperspace_common"
    HYPERSPACE_UNCOMMON = "hyperspace_uncommon"
    HYPERSPACE_RARE_LEGENDARY = "hyperspace_rare_legendary"
    HYPERFOIL = "hyperfoil"


def shuffled(cards: Sequence[Card]) -> List[Card]:
    result = list(cards)
    random.shuffle(result)
    return result


def is_same_card(a: Card, b: Card) -> bool:
    return a.id == b.id or a.name == b.name


@dataclass
class SeamDedupResult:
    clean: bool = True
    swaps: int = 0


def _first_collision(hopper: Deque[Card], start: int, end: int, seam_size: int, radius: int,
                     collides: Callable[[Card, Card], bool]) -> Optional[int]:
    for i in range(start, min(start + seam_size, end)):
        card = hopper[i]
        for j in range(max(0, i - radius), min(end, i + radius + 1)):
            if j != i and collides(card, hopper[j]):
                return i
    return None


def dedupe_seam(hopper: Deque[Card], start: int, seam_size: int, radius: int,
                collides: Callable[[Card, Card], bool] = is_same_card) -> SeamDedupResult:
    """
    Check the first `seam_size` cards of the boot that begins at `start`.

    Any card with a match within `radius` positions (looking back into the
    previous boot, never past the end of this one) is swapped with a random
    card from the back half of the boot, then the scan starts over.
    """
    end = len(hopper)
    back_half = start + (end - start) // 2
    result = SeamDedupResult()

    while True:
        offender = _first_collision(hopper, start, end, seam_size, radius, collides)
        if offender is None:
            return result
        if result.swaps >= MAX_SEAM_DEDUP_ATTEMPTS or back_half >= end:
            result.clean = False
            return result
        swap = random.randrange(back_half, end)
        hopper[offender], hopper[swap] = hopper[swap], hopper[offender]
        result.swaps += 1


class Belt:
    kind: BeltKind
    variant: Variant = Variant.NORMAL
    output_variant: Optional[Variant] = None
    seam_size = 4
    seam_radius = 4

    def __init__(self, catalog: CardCatalog):
        self.catalog = catalog
        self.set_code = catalog.set_code
        self.hopper: Deque[Card] = deque()
        self.filling_pool = tuple(self._build_filling_pool())
        self.fills = 0
        self.draws = 0
        self.last_seam_result: Optional[SeamDedupResult] = None
        self._warned_empty = False
        self._prime()

    def _build_filling_pool(self) -> List[Card]:
        raise NotImplementedError

    def _prime(self) -> None:
        self._fill_if_needed()

    @property
    def refill_threshold(self) -> int:
        return len(self.filling_pool) - 1

    def _fill_if_needed(self) -> None:
        if not self.filling_pool:
            if not self._warned_empty:
                belt_logger.warning(
                    "belt_empty_filling_pool",
                    set_code=self.set_code,
                    belt=self.kind.value
                )
                self._warned_empty = True
            return
        while len(self.hopper) <= self.refill_threshold:
            before = len(self.hopper)
            self.fill()
            if len(self.hopper) == before:
                break

    def _build_boot(self) -> List[Card]:
        return shuffled(self.filling_pool)

    def _append_boot(self, boot: List[Card]) -> None:
        start = len(self.hopper)
        self.hopper.extend(boot)
        self.fills += 1
        if start == 0 or self.seam_size <= 0 or not boot:
            return

        self.last_seam_result = dedupe_seam(self.hopper, start, self.seam_size, self.seam_radius)
        if not self.last_seam_result.clean:
            belt_logger.debug(
                "belt_seam_dedup_exhausted",
                set_code=self.set_code,
                belt=self.kind.value,
                swaps=self.last_seam_result.swaps
            )

    def fill(self) -> None:
        self._append_boot(self._build_boot())

    def _serve(self, card: Card) -> Card:
        if self.output_variant is not None:
            return card.as_variant(self.output_variant)
        return card.model_copy()

    def next(self) -> Optional[Card]:
        self._fill_if_needed()
        if not self.hopper:
            return None
        self.draws += 1
        return self._serve(self.hopper.popleft())

    def peek(self, count: int = 1) -> List[Card]:
        self._fill_if_needed()
        return [self._serve(c) for c in list(self.hopper)[:count]]

    @property
    def size(self) -> int:
        return len(self.hopper)

    def status(self) -> dict:
        return {
            "belt": self.kind.value,
            "set_code": self.set_code,
            "pool_size": len(self.filling_pool),
            "hopper_size": self.size,
            "fills": self.fills,
            "draws": self.draws,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(set_code={self.set_code!r}, hopper={self.size})"
