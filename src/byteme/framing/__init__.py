"""Record framing utilities for byteme.

This module provides utilities for framing records with their 2-byte
length delimiter.
"""

from __future__ import annotations

from .basic import frame_record, iter_records, unframe_record

__all__ = [
    "frame_record",
    "unframe_record",
    "iter_records",
]
