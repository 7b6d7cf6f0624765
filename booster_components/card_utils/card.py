# card data model.
# Catalog cards are read-only records for one printing of a card. Belts hand
# out copies, so a pack can be upgraded slot by slot without ever touching
# the catalog. The boolean flags are derived from `type` and `variant_type`
# so they always agree with the printing.
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Rarity(str, Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    LEGENDARY = "Legendary"
    SPECIAL = "Special"


class Aspect(str, Enum):
    VIGILANCE = "Vigilance"
    COMMAND = "Command"
    AGGRESSION = "Aggression"
    CUNNING = "Cunning"
    HEROISM = "Heroism"
    VILLAINY = "Villainy"


class Variant(str, Enum):
    NORMAL = "Normal"
    HYPERSPACE = "Hyperspace"
    FOIL = "Foil"
    HYPERSPACE_FOIL = "Hyperspace Foil"
    SHOWCASE = "Showcase"


LEADER = "Leader"
BASE = "Base"

ALL_ASPECTS = tuple(Aspect)


class Card(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str
    set_code: str = Field(alias="set")
    rarity: Rarity
    type: str
    aspects: Tuple[Aspect, ...] = ()
    variant_type: Variant = Field(default=Variant.NORMAL, alias="variantType")

    @computed_field(alias="isLeader")
    @property
    def is_leader(self) -> bool:
        return self.type == LEADER

    @computed_field(alias="isBase")
    @property
    def is_base(self) -> bool:
        return self.type == BASE

    @computed_field(alias="isFoil")
    @property
    def is_foil(self) -> bool:
        return self.variant_type in (Variant.FOIL, Variant.HYPERSPACE_FOIL)

    @computed_field(alias="isHyperspace")
    @property
    def is_hyperspace(self) -> bool:
        return self.variant_type in (Variant.HYPERSPACE, Variant.HYPERSPACE_FOIL)

    @computed_field(alias="isShowcase")
    @property
    def is_showcase(self) -> bool:
        return self.variant_type == Variant.SHOWCASE

    @property
    def identity(self) -> Tuple[str, str]:
        """Name + type. Some characters exist both as a Leader and a Unit."""
        return (self.name, self.type)

    @property
    def print_key(self) -> Tuple[str, str, Variant]:
        return (self.name, self.type, self.variant_type)

    @property
    def is_playable(self) -> bool:
        """True for the cards that go into the common/uncommon/rare/foil slots."""
        return not self.is_leader and not self.is_base

    def has_aspect(self, aspect: Aspect) -> bool:
        return aspect in self.aspects

    def shares_aspect(self, other: "Card") -> bool:
        return any(aspect in other.aspects for aspect in self.aspects)

    def as_variant(self, variant: Variant) -> "Card":
        """Copy of this card wearing a different treatment (foil tagging)."""
        return self.model_copy(update={"variant_type": variant})
