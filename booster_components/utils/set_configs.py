"""
Set configuration.

Each set is described by a SetConfig: its number (which decides the block,
the rare:legendary ratio and foil multipliers), the upgrade probability table
and whether Special rarity cards may appear in the foil slot. Sets 1-3 and
4-6 share their constants.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Block(str, Enum):
    ZERO = "0"   # sets 1-3
    A = "A"      # sets 4-6


class UpgradeProbabilities(BaseModel):
    """Chance for a slot to be swapped for a rarer treatment in the upgrade pass."""
    model_config = ConfigDict(frozen=True)

    leader_to_showcase: float = Field(0.0, ge=0, le=1)
    leader_to_hyperspace: float = Field(0.0, ge=0, le=1)
    base_to_hyperspace: float = Field(0.0, ge=0, le=1)
    rare_to_hyperspace: float = Field(0.0, ge=0, le=1)
    foil_to_hyperfoil: float = Field(0.0, ge=0, le=1)
    first_uc_to_hyperspace_uc: float = Field(0.0, ge=0, le=1)
    second_uc_to_hyperspace_uc: float = Field(0.0, ge=0, le=1)
    third_uc_to_hyperspace_rl: float = Field(0.0, ge=0, le=1)
    common_to_hyperspace: float = Field(0.0, ge=0, le=1)


# The rare slot is always black-border, hence rare_to_hyperspace = 0.
SETS_1_3_UPGRADES = UpgradeProbabilities(
    leader_to_showcase=1 / 288,
    leader_to_hyperspace=1 / 6,
    base_to_hyperspace=1 / 4,
    rare_to_hyperspace=0.0,
    foil_to_hyperfoil=1 / 50,
    first_uc_to_hyperspace_uc=1 / 8.5,
    second_uc_to_hyperspace_uc=1 / 8.5,
    third_uc_to_hyperspace_rl=1 / 5.5,
    common_to_hyperspace=1 / 3,
)

SETS_4_6_UPGRADES = UpgradeProbabilities(
    leader_to_showcase=1 / 288,
    leader_to_hyperspace=1 / 6,
    base_to_hyperspace=1 / 4,
    rare_to_hyperspace=0.0,
    foil_to_hyperfoil=1 / 50,
    first_uc_to_hyperspace_uc=1 / 8,
    second_uc_to_hyperspace_uc=1 / 8,
    third_uc_to_hyperspace_rl=1 / 5,
    common_to_hyperspace=1 / 3,
)


class SetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    set_code: str
    set_name: str = ""
    set_number: int = Field(ge=1, le=6)
    upgrade_probabilities: UpgradeProbabilities = SETS_1_3_UPGRADES
    special_in_foil_slot: bool = False
    # Curated common belt membership by card name. When omitted the split is
    # derived from the catalog (see belts/assignments.py).
    belt_a_names: Optional[List[str]] = None
    belt_b_names: Optional[List[str]] = None

    @property
    def block(self) -> Block:
        return Block.ZERO if self.set_number <= 3 else Block.A

    @property
    def rare_legendary_ratio(self) -> int:
        return 6 if self.set_number <= 3 else 5

    @property
    def has_curated_belts(self) -> bool:
        return bool(self.belt_a_names) and bool(self.belt_b_names)


def make_set_config(set_code: str, set_number: int, set_name: str = "", **overrides) -> SetConfig:
    """Build a config from the family constants for `set_number`."""
    early = set_number <= 3
    values = {
        "set_code": set_code,
        "set_name": set_name,
        "set_number": set_number,
        "upgrade_probabilities": SETS_1_3_UPGRADES if early else SETS_4_6_UPGRADES,
        "special_in_foil_slot": not early,
    }
    values.update(overrides)
    return SetConfig(**values)


SET_CONFIGS: Dict[str, SetConfig] = {
    "SOR": make_set_config("SOR", 1, "Spark of Rebellion"),
    "SHD": make_set_config("SHD", 2, "Shadows of the Galaxy"),
    "TWI": make_set_config("TWI", 3, "Twilight of the Republic"),
    "JTL": make_set_config("JTL", 4, "Jump to Lightspeed"),
    "LOF": make_set_config("LOF", 5, "Legends of the Force"),
    "SEC": make_set_config("SEC", 6, "Secrets of Power"),
}


def get_set_config(set_code: str) -> Optional[SetConfig]:
    return SET_CONFIGS.get(set_code)


def get_all_set_codes() -> List[str]:
    return list(SET_CONFIGS.keys())
