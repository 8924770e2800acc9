"""
Station time code decoders

Stateful decoders for the DCF77 and MSF telegrams, reached by the replay
engine only through the adapters in timecode_replay.adapters.
"""

from .dcf77 import DCF77Decoder
from .msf import MSFDecoder
from .radio_datetime import RadioDateTime

__all__ = ["DCF77Decoder", "MSFDecoder", "RadioDateTime"]
