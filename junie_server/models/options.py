"""Request/response models for option generation."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from path_engine.models.recommendation import Recommendation, Source


class InlineProfile(BaseModel):
    sparks: List[str] = []
    values: List[str] = []
    dream: str = ""


class GenerateOptionsRequest(BaseModel):
    """Generate for a stored profile (user_id) or an inline one (profile)."""

    user_id: Optional[str] = None
    profile: Optional[InlineProfile] = None
    top_n: Optional[int] = Field(default=None, ge=0, le=20)

    @model_validator(mode="after")
    def require_one(self):
        if not ((self.user_id and self.user_id.strip()) or self.profile):
            raise ValueError("Provide user_id or profile")
        return self


class OptionsMeta(BaseModel):
    total_count: int
    source: Source
    processing_time_ms: int
    vector_search_results: int


class GenerateOptionsResponse(BaseModel):
    options: List[Recommendation]
    meta: OptionsMeta
