"""Pydantic models for API output."""

from pydantic import BaseModel, Field

from meteor_api.models.meteor import MeteorRecord


class MeteorPage(BaseModel):
    """Listing response: one page of filtered records plus the filtered total."""

    data: list[MeteorRecord] = Field(default_factory=list)
    total: int = 0

    def to_json(self) -> dict:
        return {"data": [r.to_json() for r in self.data], "total": self.total}


class YearsResponse(BaseModel):
    years: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    records: int = 0
    loaded: bool = False
    cache_entries: int = 0
