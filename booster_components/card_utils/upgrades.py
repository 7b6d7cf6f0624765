"""
Upgrade pass.

After a pack is assembled every eligible slot gets one independent roll
against the set's probability table, in a fixed order:

1. leader -> Showcase, otherwise -> Hyperspace (same leader)
2. base -> Hyperspace (same base)
3. rare/legendary -> Hyperspace (same card)
4. foil -> a fresh card from the hyperfoil belt (a reroll, not the same card)
5. first uncommon -> Hyperspace (same card)
6. second uncommon -> Hyperspace (same card)
7. third uncommon -> a Hyperspace rare/legendary from its belt
8. the designated common slot -> Hyperspace (same card)

Steps 5 and 6 must run before 7: step 7 changes the rarity of a slot, and the
uncommon positions are computed up front.
"""
import random
from typing import List, Optional, Sequence

from booster_components.belts.belt import BeltKind
from booster_components.card_utils.card import Card, Rarity, Variant
from booster_components.card_utils.catalog import CardCatalog
from booster_components.utils.set_configs import Block
from booster_logs.loggers import pack_logger

MAX_RARE_REROLL_ATTEMPTS = 5

# pack positions of the nine commons when no slot came up empty
STANDARD_COMMON_INDICES = range(2, 11)

# 1-indexed common slot that can turn Hyperspace
HYPERSPACE_COMMON_SLOT = {
    Block.ZERO: 6,
    Block.A: 4,
}


def should_upgrade(probability: float) -> bool:
    return probability > 0 and random.random() < probability


def _first_index(cards: List[Card], predicate) -> Optional[int]:
    return next((i for i, c in enumerate(cards) if predicate(c)), None)


def _replace(cards: List[Card], index: int, upgraded: Optional[Card], step: str, set_code: str) -> None:
    if upgraded is None:
        return
    pack_logger.debug(
        "pack_slot_upgraded",
        set_code=set_code,
        step=step,
        index=index,
        card=cards[index].name,
        variant=upgraded.variant_type.value
    )
    cards[index] = upgraded


def apply_upgrade_pass(cards: List[Card], catalog: CardCatalog, session,
                       common_indices: Sequence[int] = STANDARD_COMMON_INDICES) -> List[Card]:
    """
    Apply the upgrade rolls to `cards` in place and return it.

    `common_indices` are the positions of the common slots in `cards`, in
    slot order. They move when an earlier slot came up empty.
    """
    probs = catalog.config.upgrade_probabilities
    variants = catalog.variants
    set_code = catalog.set_code

    leader_index = _first_index(cards, lambda c: c.is_leader)
    base_index = _first_index(cards, lambda c: c.is_base)
    foil_index = _first_index(cards, lambda c: c.is_foil)
    rare_index = _first_index(
        cards,
        lambda c: c.rarity in (Rarity.RARE, Rarity.LEGENDARY) and c.is_playable and not c.is_foil
    )
    uncommon_indices = [
        i for i, c in enumerate(cards)
        if c.rarity == Rarity.UNCOMMON and c.is_playable and not c.is_foil
    ]

    if leader_index is not None:
        leader = cards[leader_index]
        if should_upgrade(probs.leader_to_showcase):
            # showcase prints can carry a different rarity than the normal leader
            _replace(cards, leader_index, variants.find(leader, Variant.SHOWCASE, match_rarity=False),
                     "leader_to_showcase", set_code)
        elif should_upgrade(probs.leader_to_hyperspace):
            _replace(cards, leader_index, variants.find(leader, Variant.HYPERSPACE),
                     "leader_to_hyperspace", set_code)

    if base_index is not None and should_upgrade(probs.base_to_hyperspace):
        _replace(cards, base_index, variants.find(cards[base_index], Variant.HYPERSPACE),
                 "base_to_hyperspace", set_code)

    if rare_index is not None and should_upgrade(probs.rare_to_hyperspace):
        _replace(cards, rare_index, variants.find(cards[rare_index], Variant.HYPERSPACE),
                 "rare_to_hyperspace", set_code)

    if foil_index is not None and should_upgrade(probs.foil_to_hyperfoil):
        _replace(cards, foil_index, session.belt(set_code, BeltKind.HYPERFOIL).next(),
                 "foil_to_hyperfoil", set_code)

    if len(uncommon_indices) >= 1 and should_upgrade(probs.first_uc_to_hyperspace_uc):
        index = uncommon_indices[0]
        _replace(cards, index, variants.find(cards[index], Variant.HYPERSPACE),
                 "first_uc_to_hyperspace_uc", set_code)

    if len(uncommon_indices) >= 2 and should_upgrade(probs.second_uc_to_hyperspace_uc):
        index = uncommon_indices[1]
        _replace(cards, index, variants.find(cards[index], Variant.HYPERSPACE),
                 "second_uc_to_hyperspace_uc", set_code)

    if len(uncommon_indices) >= 3 and should_upgrade(probs.third_uc_to_hyperspace_rl):
        belt = session.belt(set_code, BeltKind.HYPERSPACE_RARE_LEGENDARY)
        present = {c.name for c in cards if not c.is_foil}
        upgraded = None
        for _ in range(MAX_RARE_REROLL_ATTEMPTS):
            candidate = belt.next()
            if candidate is not None and candidate.name not in present:
                upgraded = candidate
                break
        _replace(cards, uncommon_indices[2], upgraded, "third_uc_to_hyperspace_rl", set_code)

    slot = HYPERSPACE_COMMON_SLOT[catalog.config.block]
    if should_upgrade(probs.common_to_hyperspace) and slot <= len(common_indices):
        index = common_indices[slot - 1]
        if index < len(cards):
            common = cards[index]
            if common.rarity == Rarity.COMMON and common.is_playable and common.variant_type == Variant.NORMAL:
                _replace(cards, index, variants.find(common, Variant.HYPERSPACE),
                         "common_to_hyperspace", set_code)

    return cards
