"""
Timecode Replay Interfaces

Contracts between the replay components:
1. Protocol alphabet (characters -> symbols)
2. Decoder adapter (symbols -> decoded minutes)
3. Report formatter (decoded minutes -> text lines)

These interfaces allow testing against stub decoders and keep the engine
independent of any single station's bit layout.
"""

# Data models (shared structures)
from .data_models import (
    # Status bits
    DST_ANNOUNCED,
    DST_PROCESSED,
    DST_JUMP,
    DST_SUMMER,
    LEAP_ANNOUNCED,
    LEAP_PROCESSED,
    LEAP_MISSING,

    # Core data structures
    ClassificationError,
    SymbolKind,
    Symbol,
    SecondSlot,
    JumpFlags,
    DecodedMinuteReport,
)

# Interface definitions (abstract base classes)
from .decoder import DecoderAdapter

__all__ = [
    "DST_ANNOUNCED",
    "DST_PROCESSED",
    "DST_JUMP",
    "DST_SUMMER",
    "LEAP_ANNOUNCED",
    "LEAP_PROCESSED",
    "LEAP_MISSING",
    "ClassificationError",
    "SymbolKind",
    "Symbol",
    "SecondSlot",
    "JumpFlags",
    "DecodedMinuteReport",
    "DecoderAdapter",
]
