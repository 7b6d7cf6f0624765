from pydantic import BaseModel, Field
from typing import Optional

from booster_components.card_utils.pod import DEFAULT_POD_SIZE

MAX_POD_SIZE = 24

class GeneratePackRequest(BaseModel):
    set_code: str
    session_id: Optional[str] = None  # If None, a throwaway session is used

class GeneratePodRequest(BaseModel):
    set_code: str
    pack_count: int = Field(DEFAULT_POD_SIZE, ge=1, le=MAX_POD_SIZE)
    session_id: Optional[str] = None

class SessionRequest(BaseModel):
    session_id: str
