# booster pack model and assembler.
# A pack is 16 cards in a fixed order: leader, base, nine commons, three
# uncommons, the rare/legendary and the foil. The upgrade pass then swaps
# some slots in place, so the length never changes.
from collections import defaultdict
from typing import List, Tuple

from pydantic import BaseModel

from booster_components.belts.belt import BeltKind
from booster_components.belts.belt_cache import GenerationSession
from booster_components.card_utils.card import Card
from booster_components.card_utils.upgrades import apply_upgrade_pass
from booster_components.utils.set_configs import Block
from booster_logs.loggers import pack_logger

PACK_SIZE = 16
UNCOMMONS_PER_PACK = 3
MAX_COMMON_DEDUP_ATTEMPTS = 10


class Pack(BaseModel):
    set_code: str
    cards: List[Card]

    def __len__(self) -> int:
        return len(self.cards)


def duplicate_prints(cards: List[Card]) -> List[Tuple[int, int]]:
    """Index pairs of cards that are the same card in the same treatment."""
    seen = defaultdict(list)
    pairs = []
    for index, card in enumerate(cards):
        for first in seen[card.print_key]:
            pairs.append((first, index))
        seen[card.print_key].append(index)
    return pairs


def common_slot_belts(block: Block, start_with_belt_a: bool) -> List[BeltKind]:
    """Belt feeding each of the nine common slots."""
    a, b = BeltKind.COMMON_A, BeltKind.COMMON_B
    if block == Block.ZERO:
        return [a] * 6 + [b] * 3
    return [a] * 4 + [a if start_with_belt_a else b] + [b] * 4


class PackAssembler:
    def __init__(self, session: GenerationSession):
        self.session = session

    def _draw_commons(self, set_code: str, block: Block, start_with_belt_a: bool) -> List[Card]:
        drawn: List[Tuple[BeltKind, Card]] = []
        for kind in common_slot_belts(block, start_with_belt_a):
            card = self.session.belt(set_code, kind).next()
            if card is not None:
                drawn.append((kind, card))

        # belt cycling can rarely line up the same common twice, redraw from the same belt
        names = set()
        for i, (kind, card) in enumerate(drawn):
            if card.name in names:
                belt = self.session.belt(set_code, kind)
                for _ in range(MAX_COMMON_DEDUP_ATTEMPTS):
                    replacement = belt.next()
                    if replacement is not None and replacement.name not in names:
                        drawn[i] = (kind, replacement)
                        card = replacement
                        break
                else:
                    pack_logger.debug(
                        "pack_common_dedup_exhausted",
                        set_code=set_code,
                        card=card.name
                    )
            names.add(card.name)

        return [card for _, card in drawn]

    def open_pack(self, set_code: str) -> Pack:
        session = self.session
        with session.lock:
            catalog = session.catalogs.get(set_code)
            start_with_belt_a = session.toggle_alternation()

            cards: List[Card] = []
            cards.append(session.belt(set_code, BeltKind.LEADER).next())
            cards.append(session.belt(set_code, BeltKind.BASE).next())
            cards = [c for c in cards if c is not None]

            commons = self._draw_commons(set_code, catalog.config.block, start_with_belt_a)
            common_indices = range(len(cards), len(cards) + len(commons))
            cards.extend(commons)

            uncommons = session.belt(set_code, BeltKind.UNCOMMON)
            cards.extend(uncommons.next() for _ in range(UNCOMMONS_PER_PACK))
            cards.append(session.belt(set_code, BeltKind.RARE_LEGENDARY).next())
            cards.append(session.belt(set_code, BeltKind.FOIL).next())

            cards = [c for c in cards if c is not None]
            apply_upgrade_pass(cards, catalog, session, common_indices)

            duplicates = duplicate_prints(cards)
            if duplicates:
                pack_logger.debug(
                    "pack_duplicate_prints",
                    set_code=set_code,
                    cards=[cards[i].name for i, _ in duplicates],
                    positions=duplicates
                )
            if len(cards) != PACK_SIZE:
                pack_logger.debug(
                    "pack_short",
                    set_code=set_code,
                    size=len(cards)
                )

            session.packs_generated += 1
            return Pack(set_code=set_code, cards=cards)


def generate_booster_pack(session: GenerationSession, set_code: str) -> Pack:
    return PackAssembler(session).open_pack(set_code)
