"""The 128-bit decimal value and the bit-level helpers that work on it.

A value is four unsigned 32-bit words.  Words 0..2 hold a 96-bit unsigned
mantissa, least significant word first.  In word 3, bits 16..23 hold the
scale (the power of ten the mantissa is divided by) and bit 31 holds the
sign.
"""

from __future__ import annotations

from dataclasses import dataclass

WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF
WORD_BASE = 1 << WORD_BITS
MANTISSA_BITS = 96
MANTISSA_LIMIT = 1 << MANTISSA_BITS
MAX_SCALE = 28
SIGN_BIT = 31
SIGN_MASK = 1 << SIGN_BIT
SCALE_SHIFT = 16
SCALE_FIELD_BITS = 14
MAX_TEN_POWER = 38

_INT_MIN = -(1 << (WORD_BITS - 1))


def _check_index(index: int) -> None:
    if not 0 <= index < WORD_BITS:
        raise ValueError(f"bit index {index} is outside 0..{WORD_BITS - 1}")


def _check_word(value: int) -> None:
    if not 0 <= value <= WORD_MASK:
        raise ValueError(f"{value} is not an unsigned 32-bit word")


@dataclass(frozen=True)
class Decimal128:
    """An immutable 128-bit decimal stored as four 32-bit words."""

    bits: tuple[int, int, int, int] = (0, 0, 0, 0)

    def __post_init__(self) -> None:
        words = tuple(self.bits)
        if len(words) != 4:
            raise ValueError("a Decimal128 holds exactly four words")
        for word in words:
            _check_word(word)
        object.__setattr__(self, "bits", words)

    @classmethod
    def zero(cls) -> Decimal128:
        """Return positive zero with scale 0."""
        return cls((0, 0, 0, 0))

    @classmethod
    def from_mantissa(cls, mantissa: int, scale: int = 0, negative: bool = False) -> Decimal128:
        """Build a value from a 96-bit mantissa, a scale and a sign."""
        if not 0 <= mantissa < MANTISSA_LIMIT:
            raise OverflowError(f"mantissa {mantissa} does not fit in {MANTISSA_BITS} bits")
        if not 0 <= scale <= MAX_SCALE:
            raise ValueError(f"scale {scale} is outside 0..{MAX_SCALE}")
        words = [(mantissa >> (WORD_BITS * i)) & WORD_MASK for i in range(3)]
        flags = (scale << SCALE_SHIFT) | (SIGN_MASK if negative else 0)
        return cls((words[0], words[1], words[2], flags))

    def mantissa(self) -> int:
        """The 96-bit unsigned integer held in words 0..2."""
        low, mid, high, _ = self.bits
        return low | (mid << WORD_BITS) | (high << (2 * WORD_BITS))

    def is_negative(self) -> bool:
        """True when the sign bit is set."""
        return bool(get_bit(self.bits[3], SIGN_BIT))

    def scale(self) -> int:
        """The exponent field: every bit of word 3 above bit 15 except the sign."""
        return (self.bits[3] & ~SIGN_MASK & WORD_MASK) >> SCALE_SHIFT

    def with_sign(self, negative: bool) -> Decimal128:
        """Return a copy with the sign bit set or cleared."""
        flags = set_bit(self.bits[3], SIGN_BIT, 1 if negative else 0)
        return Decimal128(self.bits[:3] + (flags,))

    def with_scale(self, scale: int) -> Decimal128:
        """Return a copy whose bits 16..29 of word 3 hold ``scale``."""
        if not 0 <= scale < (1 << SCALE_FIELD_BITS):
            raise ValueError(f"scale {scale} does not fit the exponent field")
        field = ((1 << SCALE_FIELD_BITS) - 1) << SCALE_SHIFT
        flags = (self.bits[3] & ~field & WORD_MASK) | (scale << SCALE_SHIFT)
        return Decimal128(self.bits[:3] + (flags,))

    def with_mantissa_of(self, source: Decimal128) -> Decimal128:
        """Return a copy whose mantissa words are taken from ``source``."""
        return Decimal128(source.bits[:3] + (self.bits[3],))


def get_bit(value: int, index: int) -> int:
    """Return bit ``index`` of the unsigned word ``value`` as 0 or 1."""
    _check_index(index)
    return (value >> index) & 1


def set_bit(value: int, index: int, bit: int = 1) -> int:
    """Return ``value`` with bit ``index`` set to ``bit``; other bit values leave it unchanged."""
    _check_index(index)
    if bit == 1:
        return (value | (1 << index)) & WORD_MASK
    if bit == 0:
        return value & ~(1 << index) & WORD_MASK
    return value


def clear_bit(value: int, index: int) -> int:
    """Return ``value`` with bit ``index`` cleared."""
    return set_bit(value, index, 0)


def check_bit(value: int, index: int) -> int:
    """Return ``value`` masked to bit ``index``: non-zero when the bit is set."""
    _check_index(index)
    return value & (1 << index)


def as_uint(value: int) -> int:
    """Reinterpret a signed 32-bit integer as unsigned."""
    if not _INT_MIN <= value <= WORD_MASK:
        raise ValueError(f"{value} does not fit in 32 bits")
    return value & WORD_MASK


def as_int(value: int) -> int:
    """Reinterpret an unsigned 32-bit integer as signed."""
    _check_word(value)
    return value - WORD_BASE if value & SIGN_MASK else value


def ten_pow(power: int) -> Decimal128:
    """Return 10**power, 0 <= power <= 38, spread over all four words."""
    if not 0 <= power <= MAX_TEN_POWER:
        raise ValueError(f"power {power} is outside 0..{MAX_TEN_POWER}")
    number = 10**power
    return Decimal128(tuple((number >> (WORD_BITS * i)) & WORD_MASK for i in range(4)))


def checked_scale(value: Decimal128) -> int:
    """Return the scale in bits 16..23 of word 3; raise if it exceeds 28."""
    scale = (value.bits[3] >> SCALE_SHIFT) & 0xFF
    if scale > MAX_SCALE:
        raise ValueError(f"scale {scale} exceeds {MAX_SCALE}")
    return scale


def _divide_mantissa(value: Decimal128, exp: int) -> tuple[int, int]:
    """Divide the mantissa by ten ``exp`` times; return the quotient and the last remainder."""
    mantissa = value.mantissa()
    remainder = 0
    for _ in range(max(exp, 0)):
        mantissa, remainder = divmod(mantissa, 10)
    return mantissa, remainder


def truncate_scale(value: Decimal128, exp: int) -> Decimal128:
    """Drop ``exp`` decimal digits from the mantissa and clear word 3 except the sign."""
    quotient, _ = _divide_mantissa(value, exp)
    truncated = Decimal128.from_mantissa(quotient)
    return truncated.with_sign(value.is_negative())


def last_dropped_digit(value: Decimal128, exp: int) -> int:
    """Return the last digit removed when the mantissa is divided by ten ``exp`` times."""
    _, remainder = _divide_mantissa(value, exp)
    return remainder


def drop_last_digit(value: Decimal128) -> tuple[Decimal128, int]:
    """Divide the mantissa by ten; return the new value and the digit removed."""
    quotient, remainder = divmod(value.mantissa(), 10)
    return value.with_mantissa_of(Decimal128.from_mantissa(quotient)), remainder


def has_overflow_bits(value: int) -> bool:
    """True when bit 31 of the 32-bit ``value`` is set together with any lower bit."""
    word = as_uint(value)
    return bool(word & SIGN_MASK) and bool(word & ~SIGN_MASK & WORD_MASK)