"""
Bit field helpers shared by the station decoders

All helpers take sequences of Optional[bool] (None = undetermined) and
return None as soon as any input bit is undetermined.
"""

from typing import Optional, Sequence

Bits = Sequence[Optional[bool]]


def count_ones(bits: Bits) -> Optional[int]:
    """Number of set bits, or None if any bit is undetermined"""
    if any(b is None for b in bits):
        return None
    return sum(1 for b in bits if b)


def even_parity(bits: Bits) -> Optional[bool]:
    """True if data bits plus parity bit hold an even number of ones"""
    ones = count_ones(bits)
    return None if ones is None else ones % 2 == 0


def odd_parity(bits: Bits) -> Optional[bool]:
    """True if data bits plus parity bit hold an odd number of ones"""
    ones = count_ones(bits)
    return None if ones is None else ones % 2 == 1


def decode_bcd(bits: Bits, weights: Sequence[int]) -> Optional[int]:
    """
    Decode a BCD field given the weight of each bit.

    Works for both bit orders: DCF77 sends (1, 2, 4, 8, 10, 20, 40),
    MSF sends (40, 20, 10, 8, 4, 2, 1).

    Returns:
        Decoded value, or None if a bit is undetermined or a digit exceeds 9
    """
    if any(b is None for b in bits):
        return None
    units = sum(w for b, w in zip(bits, weights) if b and w < 10)
    tens = sum(w for b, w in zip(bits, weights) if b and w >= 10) // 10
    if units > 9 or tens > 9:
        return None
    return tens * 10 + units


def decode_lsb_first(bits: Bits) -> Optional[int]:
    """Plain binary value with the first bit as least significant"""
    if any(b is None for b in bits):
        return None
    value = 0
    for i, b in enumerate(bits):
        if b:
            value |= 1 << i
    return value


def decode_unary(bits: Bits) -> Optional[int]:
    """
    Decode a run of leading ones (MSF DUT1 style).

    Returns:
        Number of leading ones, or None if undetermined or if a one
        follows the first zero
    """
    if any(b is None for b in bits):
        return None
    count = 0
    while count < len(bits) and bits[count]:
        count += 1
    if any(bits[count:]):
        return None
    return count
