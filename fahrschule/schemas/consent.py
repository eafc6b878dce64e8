"""Pydantic schema for the persisted consent record."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

CONSENT_STORAGE_KEY = "consent.v1"
CONSENT_VERSION = "1.0"


class ConsentState(BaseModel):
    """Decision governing whether third-party embeds (map tiles) may load.

    ``decided_at`` is None until the visitor accepts, declines or saves a
    choice. Serialized with camelCase keys to match the stored record.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    external_media_allowed: bool = Field(default=False, alias="externalMediaAllowed")
    decided_at: datetime | None = Field(default=None, alias="decidedAt")
    schema_version: str = Field(default=CONSENT_VERSION, alias="schemaVersion")

    def to_record(self) -> str:
        return self.model_dump_json(by_alias=True)
