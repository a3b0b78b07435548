"""Tests for download authorization decisions."""

import asyncio

import pytest

from fileshare.models.file_record import FileRecord
from fileshare.services.file_access import AccessDecision, resolve_access
from fileshare.services.passwords import hash_password


@pytest.fixture
def protected_record():
    hashed = asyncio.run(hash_password("secret"))
    return FileRecord(path="/tmp/x", original_name="x.txt", password=hashed)


@pytest.fixture
def open_record():
    return FileRecord(path="/tmp/y", original_name="y.txt")


@pytest.mark.parametrize("supplied", [None, "", "anything"])
def test_unprotected_record_is_always_authorized(open_record, supplied):
    assert asyncio.run(resolve_access(open_record, supplied)) is AccessDecision.AUTHORIZED


@pytest.mark.parametrize("supplied", [None, ""])
def test_protected_record_without_password_prompts(protected_record, supplied):
    assert asyncio.run(resolve_access(protected_record, supplied)) is AccessDecision.PROMPT


def test_protected_record_wrong_password(protected_record):
    decision = asyncio.run(resolve_access(protected_record, "Secret"))

    assert decision is AccessDecision.PROMPT_ERROR


def test_protected_record_right_password(protected_record):
    decision = asyncio.run(resolve_access(protected_record, "secret"))

    assert decision is AccessDecision.AUTHORIZED


def test_malformed_hash_is_a_mismatch():
    """A corrupt stored hash re-prompts instead of raising."""
    record = FileRecord(path="/tmp/z", original_name="z.txt", password="not-a-bcrypt-hash")

    assert asyncio.run(resolve_access(record, "secret")) is AccessDecision.PROMPT_ERROR
