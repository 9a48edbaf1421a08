from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from ..core.config import Sport

class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")  # reject unknown body fields

class SessionUpdate(_Strict):
    sport: Optional[Sport] = Field(default=None, description="switching sport resets the league")
    league_id: Optional[int] = Field(default=None, description="applied after the sport switch")
    date_from: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    date_to: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")

class PromptRequest(_Strict):
    prompt: str = Field(..., min_length=1)

class PromptResponse(BaseModel):
    prompt: str

class FavoriteState(BaseModel):
    sport: str
    team_id: int
    favorite: bool
