"""
Decoding policy shared by every model exchanged with the backend.

Wire payloads use snake_case keys, which map one-to-one onto the Python
attribute names. Date-time fields are ISO-8601 strings. Keys the client does
not know about are ignored so additive server changes never break decoding.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Base class applying the global wire decoding policy."""

    model_config = ConfigDict(extra="ignore")

    def to_wire(self) -> bytes:
        """Serialize using the same key and timestamp conventions as decoding."""
        return self.model_dump_json(exclude_none=True).encode("utf-8")


__all__ = ["WireModel"]
