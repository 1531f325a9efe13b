"""
Pydantic Schemas

Validation models for data entering the application.

Usage:
======
    from modrate.shared.schemas import RawModRecord, RawSnapshot
"""

from modrate.shared.schemas.catalog import (
    NO_DESCRIPTION,
    RawModRecord,
    RawModVersion,
    RawSnapshot,
    decode_records,
)

__all__ = [
    "NO_DESCRIPTION",
    "RawModRecord",
    "RawModVersion",
    "RawSnapshot",
    "decode_records",
]
