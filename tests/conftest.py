"""Shared test fixtures for all test modules."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fahrschule.schemas.registration import RegistrationSubmission
from fahrschule.services.consent import MemoryStorage


@pytest.fixture
def full_form() -> dict:
    """A completely filled-in registration form, as sent by the website."""
    return {
        "vorname": "Max",
        "nachname": "Mustermann",
        "email": "max@example.de",
        "telefon": "0171 2345678",
        "geburtsdatum": "2007-04-12",
        "klasse": "B",
        "starttermin": "2026-11-02",
        "nachricht": "Ich habe nur nachmittags Zeit.",
    }


@pytest.fixture
def full_submission(full_form) -> RegistrationSubmission:
    return RegistrationSubmission.model_validate(full_form)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now
