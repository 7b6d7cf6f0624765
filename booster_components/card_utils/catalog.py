# card catalog for one set, plus the registry of loaded sets.
# Belts filter their filling pools out of a CardCatalog, the upgrade pass
# looks up alternate printings through its VariantIndex.
from collections import defaultdict
from functools import cached_property
from typing import Dict, Iterable, List, Optional, Tuple

from booster_components.belts.assignments import assign_common_belts
from booster_components.card_utils.card import Card, Rarity, Variant
from booster_components.utils.set_configs import SetConfig


class UnknownSetError(KeyError):
    """Raised when a set code has no catalog loaded."""


class VariantIndex:
    """
    (name, type) -> {variant -> [cards]}, built once per catalog.

    A character can exist both as a Leader and as a Unit, so the type is part
    of the key. Several printings of the same variant may exist (different
    rarities), which is why each entry is a list.
    """

    def __init__(self, cards: Iterable[Card]):
        self._prints: Dict[Tuple[str, str], Dict[Variant, List[Card]]] = defaultdict(lambda: defaultdict(list))
        for card in cards:
            self._prints[card.identity][card.variant_type].append(card)

    def find(self, card: Card, variant: Variant, match_rarity: bool = True) -> Optional[Card]:
        """Copy of `card` in another treatment, or None if it was never printed that way."""
        by_variant = self._prints.get(card.identity)
        if not by_variant:
            return None
        for candidate in by_variant.get(variant, ()):
            if not match_rarity or candidate.rarity == card.rarity:
                return candidate.model_copy()
        return None

    def variants_of(self, card: Card) -> List[Variant]:
        return list(self._prints.get(card.identity, {}).keys())

    def __len__(self) -> int:
        return len(self._prints)


class CardCatalog:
    def __init__(self, cards: Iterable[Card], config: SetConfig):
        self.config = config
        self.cards: Tuple[Card, ...] = tuple(cards)
        self.variants = VariantIndex(self.cards)

    @property
    def set_code(self) -> str:
        return self.config.set_code

    def _select(self, variant: Variant, rarities, predicate) -> List[Card]:
        return [
            c for c in self.cards
            if c.variant_type == variant
            and (not rarities or c.rarity in rarities)
            and predicate(c)
        ]

    def leaders(self, variant: Variant = Variant.NORMAL, *rarities: Rarity) -> List[Card]:
        return self._select(variant, rarities, lambda c: c.is_leader)

    def bases(self, variant: Variant = Variant.NORMAL, *rarities: Rarity) -> List[Card]:
        return self._select(variant, rarities, lambda c: c.is_base)

    def playables(self, variant: Variant = Variant.NORMAL, *rarities: Rarity) -> List[Card]:
        """Non-leader, non-base cards of one treatment, optionally limited to some rarities."""
        return self._select(variant, rarities, lambda c: c.is_playable)

    @cached_property
    def common_belt_names(self) -> Dict[str, List[str]]:
        """Belt A / belt B membership by card name, curated or derived once."""
        if self.config.has_curated_belts:
            return {"A": list(self.config.belt_a_names), "B": list(self.config.belt_b_names)}
        return assign_common_belts(self.playables(Variant.NORMAL, Rarity.COMMON), self.config.block)

    def common_belt_cards(self, belt_id: str) -> List[Card]:
        """Normal commons for one belt, in assignment order. Unknown names are skipped."""
        by_name: Dict[str, Card] = {}
        for card in self.playables(Variant.NORMAL, Rarity.COMMON):
            by_name.setdefault(card.name, card)
        return [by_name[name] for name in self.common_belt_names[belt_id] if name in by_name]

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"CardCatalog(set_code={self.set_code!r}, cards={len(self.cards)})"


class CatalogRegistry:
    def __init__(self):
        self.catalogs: Dict[str, CardCatalog] = {}

    def add(self, catalog: CardCatalog) -> None:
        self.catalogs[catalog.set_code] = catalog

    def get(self, set_code: str) -> CardCatalog:
        try:
            return self.catalogs[set_code]
        except KeyError:
            raise UnknownSetError(set_code) from None

    def remove(self, set_code: str) -> None:
        self.catalogs.pop(set_code, None)

    def set_codes(self) -> List[str]:
        return sorted(self.catalogs.keys())

    def __contains__(self, set_code: str) -> bool:
        return set_code in self.catalogs

    def __len__(self) -> int:
        return len(self.catalogs)
