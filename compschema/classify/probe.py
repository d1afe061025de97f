"""
Encoding Probe - recovers integer framing by measuring the real encoder.

Static types cannot tell a VarInt from a fixed 4-byte Int. Encoding the
same shape carrying 0 and 128 can:

    VarInt(0)   = 1 byte     VarInt(128) = 2 bytes   -> lengths differ
    Int(0)      = 4 bytes    Int(128)    = 4 bytes   -> lengths equal

128 is the smallest value that needs a continuation byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from compschema.protocol.wire import WireType

log = logging.getLogger(__name__)

# Serializes one value of the entry's declared type. May raise.
EncodeFn = Callable[[Any], bytes]
# Builds a sample value of the entry's shape carrying the given integer.
SampleFn = Callable[[int], Any]

PROBE_LOW = 0
PROBE_HIGH = 128


@dataclass(frozen=True)
class ProbeResult:
    label: str                          # WireType.VARINT or WireType.INT32
    verified: bool                      # False = conservative fallback, not measured
    lengths: tuple[int, int] | None = None
    error: str = ""

    @property
    def compact(self) -> bool:
        return self.label == WireType.VARINT


def _fallback(reason: str) -> ProbeResult:
    return ProbeResult(WireType.VARINT, verified=False, error=reason)


def probe_integer_framing(
    encode: EncodeFn | None,
    construct: SampleFn | None,
    low: int = PROBE_LOW,
    high: int = PROBE_HIGH,
) -> ProbeResult:
    """Compare encoded lengths of two samples to pick compact vs fixed framing.

    Never raises: any failure to build or encode a sample yields the
    compact default with verified=False.
    """
    if encode is None:
        return _fallback("no encoder")
    if construct is None:
        return _fallback("no sample constructor")

    try:
        len_low = len(encode(construct(low)))
        len_high = len(encode(construct(high)))
    except Exception as e:
        return _fallback(f"{type(e).__name__}: {e}")

    if len_low != len_high:
        label = WireType.VARINT
    else:
        label = WireType.INT32
    log.debug("probe: %d -> %d bytes, %d -> %d bytes => %s", low, len_low, high, len_high, label)
    return ProbeResult(label, verified=True, lengths=(len_low, len_high))
