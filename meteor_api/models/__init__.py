"""Domain models."""

from meteor_api.models.meteor import MeteorRecord

__all__ = ["MeteorRecord"]
