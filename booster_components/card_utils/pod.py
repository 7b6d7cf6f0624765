import os
from typing import List

from pydantic import BaseModel

from booster_components.belts.belt_cache import GenerationSession
from booster_components.card_utils.pack import Pack, PackAssembler
from booster_logs.loggers import pack_logger

DEFAULT_POD_SIZE = int(os.getenv("DEFAULT_POD_SIZE", "6"))


class Pod(BaseModel):
    """A sealed pod: N packs opened from freshly reset belts."""
    set_code: str
    packs: List[Pack]

    def all_cards(self):
        return [card for pack in self.packs for card in pack.cards]


class PodAssembler:
    def __init__(self, session: GenerationSession):
        self.session = session
        self.packs = PackAssembler(session)

    def open_pod(self, set_code: str, pack_count: int = DEFAULT_POD_SIZE) -> Pod:
        with self.session.lock:
            # reject unknown sets before throwing away the current belts
            self.session.catalogs.get(set_code)
            self.session.reset()
            packs = [self.packs.open_pack(set_code) for _ in range(pack_count)]

        pack_logger.info(
            "pod_generated",
            set_code=set_code,
            session_id=self.session.session_id,
            pack_count=len(packs)
        )
        return Pod(set_code=set_code, packs=packs)


def generate_sealed_pod(session: GenerationSession, set_code: str, pack_count: int = DEFAULT_POD_SIZE) -> Pod:
    return PodAssembler(session).open_pod(set_code, pack_count)
