"""
Common belt membership.

Sets that ship curated belt lists use them as-is. For the rest, the split is
derived from aspects:

Block 0 (sets 1-3)
    A: Vigilance / Command / Aggression cards without Cunning (slots 1-6)
    B: everything else (slots 7-9), sized to a third of the commons

Block A (sets 4-6)
    A: Vigilance / Command / Villainy family (slots 1-4)
    B: Aggression / Cunning / Heroism / neutral family (slots 6-9)
    Slot 5 alternates, so the belts are balanced to an even split.
"""
from typing import Dict, List

from booster_components.card_utils.card import Aspect, Card
from booster_components.utils.set_configs import Block

V, C, A, CU = Aspect.VIGILANCE, Aspect.COMMAND, Aspect.AGGRESSION, Aspect.CUNNING
VI, H = Aspect.VILLAINY, Aspect.HEROISM


def is_mono(card: Card, aspect: Aspect) -> bool:
    return card.aspects == (aspect,)


def is_neutral(card: Card) -> bool:
    return not card.aspects


def is_flexible(card: Card) -> bool:
    """Cards without a color aspect. They can sit in either belt."""
    return is_mono(card, VI) or is_mono(card, H) or is_neutral(card)


def _move(card: Card, source: List[Card], target: List[Card]) -> None:
    source.remove(card)
    target.append(card)


def assign_block_0(commons: List[Card]) -> Dict[str, List[Card]]:
    belt_a, belt_b = [], []
    for card in commons:
        if any(card.has_aspect(a) for a in (V, C, A)) and not card.has_aspect(CU):
            belt_a.append(card)
        else:
            belt_b.append(card)

    target_b = len(commons) // 3
    target_a = len(commons) - target_b

    for card in [c for c in belt_a if is_flexible(c)][::-1]:
        if len(belt_a) <= target_a:
            break
        _move(card, belt_a, belt_b)
    for card in [c for c in belt_b if is_flexible(c)][::-1]:
        if len(belt_b) <= target_b:
            break
        _move(card, belt_b, belt_a)

    return {"A": belt_a, "B": belt_b}


def _block_a_home(card: Card):
    """(belt, flexible) for one common in a Block A set."""
    vig_cmd = card.has_aspect(V) or card.has_aspect(C)
    agg_cun = card.has_aspect(A) or card.has_aspect(CU)
    vil, her = card.has_aspect(VI), card.has_aspect(H)

    if is_mono(card, VI):
        return "A", True
    if is_mono(card, H) or is_neutral(card):
        return "B", True
    if (vig_cmd or vil) and not agg_cun and not her:
        return "A", False
    if (agg_cun or her) and not vig_cmd and not vil:
        return "B", False
    if vig_cmd and agg_cun:
        return "A", False
    if vig_cmd and her:
        return "A", True
    if agg_cun and vil:
        return "B", False
    if vil and her:
        return "A", False
    return "B", False


def assign_block_a(commons: List[Card]) -> Dict[str, List[Card]]:
    belts = {"A": [], "B": []}
    flexible = []
    for card in commons:
        belt_id, flex = _block_a_home(card)
        belts[belt_id].append(card)
        if flex:
            flexible.append(card)

    target_a = len(commons) // 2
    target_b = len(commons) - target_a

    for card in flexible:
        if len(belts["A"]) > target_a and card in belts["A"]:
            _move(card, belts["A"], belts["B"])
        elif len(belts["B"]) > target_b and card in belts["B"]:
            _move(card, belts["B"], belts["A"])

    return belts


def assign_common_belts(commons: List[Card], block: Block) -> Dict[str, List[str]]:
    """Split Normal commons into belt A / belt B name lists."""
    split = assign_block_0(commons) if block == Block.ZERO else assign_block_a(commons)
    return {belt_id: [c.name for c in cards] for belt_id, cards in split.items()}
