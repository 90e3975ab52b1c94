"""Meteorite landing record as published by the NASA open data portal."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class MeteorRecord(BaseModel):
    """A single dataset entry.

    Only ``year`` and ``mass`` are interpreted; every other source field
    (name, id, recclass, geolocation, ...) is kept as-is and serialised
    back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    year: Any = None
    mass: Any = None

    def to_json(self) -> dict:
        """Dump the record the way it was received (absent fields stay absent)."""
        return self.model_dump(mode="json", exclude_unset=True)
