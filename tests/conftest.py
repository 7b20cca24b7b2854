"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def zero_greeting_fields() -> dict[str, bytes]:
    """Zeroed byte-array fields of the 64-byte server greeting."""
    return {
        "unused": bytes(12),
        "challenge": bytes(16),
        "salt": bytes(16),
        "mbz": bytes(12),
    }


@pytest.fixture
def greeting_wire() -> bytes:
    """Wire bytes of a greeting with mode=1, count=1024 and zeroed arrays."""
    return bytes(12) + b"\x00\x00\x00\x01" + bytes(32) + b"\x00\x00\x04\x00" + bytes(12)
