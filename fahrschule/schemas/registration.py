"""Pydantic schemas for the registration form endpoint."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value):
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_text(item) or "" for item in value)
    return json.dumps(value, ensure_ascii=False)


class RegistrationSubmission(BaseModel):
    """Registration form payload. Every field is optional.

    JSON keys follow the German form field names (``vorname``, ``nachname``, ...).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str | None = Field(default=None, alias="vorname")
    last_name: str | None = Field(default=None, alias="nachname")
    email: str | None = Field(default=None, alias="email")
    phone: str | None = Field(default=None, alias="telefon")
    birth_date: str | None = Field(default=None, alias="geburtsdatum")
    desired_class: str | None = Field(default=None, alias="klasse")
    desired_start_date: str | None = Field(default=None, alias="starttermin")
    message: str | None = Field(default=None, alias="nachricht")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, value):
        # Form libraries sometimes send numbers (e.g. phone) unquoted,
        # or multi-selects as lists
        return _as_text(value)


class MessageResponse(BaseModel):
    message: str
