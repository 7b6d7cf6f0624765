# belt cache and generation sessions.
# A session owns its belts, the common-slot alternation flag and a lock, so
# two sessions never share hopper state.
import threading
import uuid
from functools import partial
from typing import Callable, Dict, Optional, Tuple

from booster_components.belts.base_belt import BaseBelt, HyperspaceBaseBelt
from booster_components.belts.belt import Belt, BeltKind
from booster_components.belts.common_belt import CommonBelt
from booster_components.belts.foil_belt import FoilBelt, HyperfoilBelt
from booster_components.belts.leader_belt import HyperspaceLeaderBelt, LeaderBelt, ShowcaseLeaderBelt
from booster_components.belts.rare_legendary_belt import HyperspaceRareLegendaryBelt, RareLegendaryBelt
from booster_components.belts.uncommon_belt import HyperspaceCommonBelt, HyperspaceUncommonBelt, UncommonBelt
from booster_components.card_utils.catalog import CardCatalog, CatalogRegistry
from booster_logs.loggers import belt_logger

BELT_FACTORIES: Dict[BeltKind, Callable[[CardCatalog], Belt]] = {
    BeltKind.LEADER: LeaderBelt,
    BeltKind.BASE: BaseBelt,
    BeltKind.COMMON_A: partial(CommonBelt, belt_id="A"),
    BeltKind.COMMON_B: partial(CommonBelt, belt_id="B"),
    BeltKind.UNCOMMON: UncommonBelt,
    BeltKind.RARE_LEGENDARY: RareLegendaryBelt,
    BeltKind.FOIL: FoilBelt,
    BeltKind.HYPERSPACE_LEADER: HyperspaceLeaderBelt,
    BeltKind.SHOWCASE_LEADER: ShowcaseLeaderBelt,
    BeltKind.HYPERSPACE_BASE: HyperspaceBaseBelt,
    BeltKind.HYPERSPACE_COMMON: HyperspaceCommonBelt,
    BeltKind.HYPERSPACE_UNCOMMON: HyperspaceUncommonBelt,
    BeltKind.HYPERSPACE_RARE_LEGENDARY: HyperspaceRareLegendaryBelt,
    BeltKind.HYPERFOIL: HyperfoilBelt,
}


class BeltCache:
    """Belts created lazily per (set_code, kind) and kept until reset."""

    def __init__(self, catalogs: CatalogRegistry):
        self.catalogs = catalogs
        self.belts: Dict[Tuple[str, BeltKind], Belt] = {}

    def get(self, set_code: str, kind: BeltKind) -> Belt:
        key = (set_code, kind)
        belt = self.belts.get(key)
        if belt is None:
            belt = BELT_FACTORIES[kind](self.catalogs.get(set_code))
            self.belts[key] = belt
            belt_logger.debug(
                "belt_created",
                set_code=set_code,
                belt=kind.value,
                pool_size=len(belt.filling_pool)
            )
        return belt

    def reset(self) -> None:
        self.belts.clear()

    def status(self) -> list:
        return [belt.status() for belt in self.belts.values()]

    def __contains__(self, key: Tuple[str, BeltKind]) -> bool:
        return key in self.belts

    def __len__(self) -> int:
        return len(self.belts)


class GenerationSession:
    def __init__(self, catalogs: CatalogRegistry, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.catalogs = catalogs
        self.belts = BeltCache(catalogs)
        self.start_with_belt_a = True
        self.lock = threading.RLock()
        self.packs_generated = 0

    def belt(self, set_code: str, kind: BeltKind) -> Belt:
        return self.belts.get(set_code, kind)

    def toggle_alternation(self) -> bool:
        """Flag value for the pack being built. Flips it for the next pack."""
        with self.lock:
            current = self.start_with_belt_a
            self.start_with_belt_a = not current
            return current

    def reset(self) -> None:
        with self.lock:
            self.belts.reset()
            self.start_with_belt_a = True
        belt_logger.info(
            "belt_cache_reset",
            session_id=self.session_id
        )

    def status(self) -> dict:
        return {
            "session_id": self.session_id,
            "packs_generated": self.packs_generated,
            "start_with_belt_a": self.start_with_belt_a,
            "belts": self.belts.status(),
        }
