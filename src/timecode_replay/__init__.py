"""
Timecode Replay - log replay and report assembly for longwave time signals

Replays recorded DCF77 and MSF (NPL) logs, one character per received
second and one line per minute, through a per-station decoder and
assembles a human-readable report: the bit echo of every minute, the
decoded date and time with DST and leap second status, parity and
check-bit problems, and fields that jumped against the prediction.

Quick Start:
    from timecode_replay import replay_buffer

    with open("dcf77.log") as f:
        for line in replay_buffer("dcf77", f.read()):
            print(line)
"""

__version__ = "0.1.0"

from .interfaces import ClassificationError, DecodedMinuteReport, DecoderAdapter
from .stations import StationType, StationProfile, get_profile
from .alphabet import classify
from .adapters import DCF77Adapter, MSFAdapter, create_adapter
from .report import ReportFormatter, create_formatter
from .engine import ReplayEngine, replay_buffer
from .telegram_encoder import encode_dcf77_minute, encode_msf_minute, synthesize_log

__all__ = [
    "ClassificationError",
    "DecodedMinuteReport",
    "DecoderAdapter",
    "StationType",
    "StationProfile",
    "get_profile",
    "classify",
    "DCF77Adapter",
    "MSFAdapter",
    "create_adapter",
    "ReportFormatter",
    "create_formatter",
    "ReplayEngine",
    "replay_buffer",
    "encode_dcf77_minute",
    "encode_msf_minute",
    "synthesize_log",
]
