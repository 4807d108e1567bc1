"""A 192-bit working form of the decimal used for exact intermediate arithmetic.

The wide value keeps a 192-bit unsigned magnitude, a sign and a power of ten.
The module-level helpers work on 192-character strings of ``0`` and ``1``,
most significant bit first.
"""

from __future__ import annotations

from dataclasses import dataclass

from .bits import (
    MANTISSA_LIMIT,
    MAX_SCALE,
    SCALE_SHIFT,
    SIGN_MASK,
    WORD_BITS,
    WORD_MASK,
    Decimal128,
)

WIDE_BITS = 192
WIDE_LIMIT = 1 << WIDE_BITS
WIDE_MASK = WIDE_LIMIT - 1
GROUP_BITS = 32

_TOP_BIT = 1 << (WIDE_BITS - 1)
_LOW_MASK = _TOP_BIT - 1
_FLIP = str.maketrans("01", "10")


def _check_digits(bits: str) -> None:
    if set(bits) - {"0", "1"}:
        raise ValueError(f"{bits!r} is not a string of binary digits")


def _parse(bits: str) -> int:
    if len(bits) != WIDE_BITS:
        raise ValueError(f"expected {WIDE_BITS} binary digits, got {len(bits)}")
    _check_digits(bits)
    return int(bits, 2)


def _render(number: int) -> str:
    return format(number, f"0{WIDE_BITS}b")


def _add(first: int, second: int) -> int:
    # A carry that reaches the top bit leaves it set instead of wrapping.
    total = first + second
    if total > _LOW_MASK:
        return (total & _LOW_MASK) | _TOP_BIT
    return total


def _invert(number: int) -> int:
    return number ^ WIDE_MASK


def _sub(first: int, second: int) -> int:
    result = _add(first, _add(_invert(second), 1))
    if result:
        result &= ~(1 << (result.bit_length() - 1))
    return result


def _mul10(number: int, count: int) -> int:
    if count < 0:
        raise ValueError(f"count {count} is negative")
    for _ in range(count):
        doubled = (number << 1) & WIDE_MASK
        eightfold = (doubled << 2) & WIDE_MASK
        number = _add(doubled, eightfold)
    return number


def int_to_binary(num: int) -> str:
    """Return the unsigned 32-bit ``num`` as 32 binary digits."""
    if not 0 <= num <= WORD_MASK:
        raise ValueError(f"{num} is not an unsigned 32-bit word")
    return format(num, f"0{WORD_BITS}b")


def binary_to_int(bits: str) -> int:
    """Parse a string of binary digits; the empty string is zero."""
    if not bits:
        return 0
    _check_digits(bits)
    return int(bits, 2)


def strip_leading_zeros(bits: str) -> str:
    """Return ``bits`` from its first ``1`` on, or an empty string if it has none."""
    first_one = bits.find("1")
    return "" if first_one < 0 else bits[first_one:]


def shift_left(number: str, count: int) -> str:
    """Shift a 192-bit string left by ``count``, dropping bits that leave the top."""
    if count < 0:
        raise ValueError(f"count {count} is negative")
    return _render((_parse(number) << count) & WIDE_MASK)


def add_bits(first: str, second: str) -> str:
    """Add two 192-bit strings; a carry into the top bit leaves that bit set."""
    return _render(_add(_parse(first), _parse(second)))


def sub_bits(first: str, second: str) -> str:
    """Subtract ``second`` from ``first`` by two's-complement addition."""
    return _render(_sub(_parse(first), _parse(second)))


def invert(number: str) -> str:
    """Flip every binary digit of ``number``."""
    _check_digits(number)
    return number.translate(_FLIP)


def div10(number: str) -> str:
    """Divide a 192-bit string by ten, discarding the remainder."""
    return _render(_parse(number) // 10)


def mul10(number: str, count: int) -> str:
    """Multiply a 192-bit string by ten ``count`` times, using shifts and adds."""
    return _render(_mul10(_parse(number), count))


@dataclass(frozen=True)
class WideDecimal:
    """A sign, a power of ten and a 192-bit magnitude."""

    magnitude: int = 0
    negative: bool = False
    power: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.magnitude < WIDE_LIMIT:
            raise ValueError(f"magnitude does not fit in {WIDE_BITS} bits")

    @classmethod
    def from_decimal(cls, value: Decimal128) -> WideDecimal:
        """Widen a Decimal128, keeping its sign and the scale in bits 16..23."""
        power = (value.bits[3] >> SCALE_SHIFT) & 0xFF
        return cls(value.mantissa(), value.is_negative(), power)

    def to_decimal(self) -> Decimal128:
        """Narrow to a Decimal128: the low 96 bits, the low 8 bits of the power and the sign."""
        low = self.magnitude & (MANTISSA_LIMIT - 1)
        words = tuple((low >> (WORD_BITS * i)) & WORD_MASK for i in range(3))
        flags = ((self.power & 0xFF) << SCALE_SHIFT) | (SIGN_MASK if self.negative else 0)
        return Decimal128(words + (flags,))

    def bit_string(self) -> str:
        """The magnitude as 192 binary digits."""
        return _render(self.magnitude)

    def format(self) -> str:
        """A printable dump: six 32-bit groups on two lines, then power and sign."""
        bits = self.bit_string()
        parts = []
        for index in range(WIDE_BITS // GROUP_BITS):
            parts.append(bits[index * GROUP_BITS:(index + 1) * GROUP_BITS] + " ")
            if index == 2:
                parts.append("\n")
        parts.append(f"  pow: {self.power}  sign: {int(self.negative)} \n\n")
        return "".join(parts)

    def has_trailing_zero(self) -> bool:
        """True when the magnitude is a multiple of ten."""
        return _mul10(self.magnitude // 10, 1) == self.magnitude

    def rounded(self) -> WideDecimal:
        """Drop digits until the magnitude fits 96 bits and the power is at most 28.

        The last dropped digit rounds half to even; a tie on an even quotient
        rounds up when digits dropped earlier were not all zero.
        """
        number = self.magnitude
        original = number
        power = self.power
        while number >= MANTISSA_LIMIT or power > MAX_SCALE:
            quotient = number // 10
            if power == 1 or 0 < quotient < MANTISSA_LIMIT:
                fraction = _sub(number, _mul10(quotient, 1))
                even = quotient % 2 == 0
                if fraction >= 6 or (not even and fraction == 5):
                    quotient = _add(quotient, 1)
                elif even and fraction == 5:
                    original = _sub(original, number)
                    if original:
                        quotient = _add(quotient, 1)
            number = quotient
            power -= 1
        return WideDecimal(number, self.negative, power)

    def normalized(self) -> WideDecimal:
        """Scale the magnitude up by tens until the power reaches 28."""
        number = self.magnitude
        power = self.power
        while power < MAX_SCALE:
            number = _mul10(number, 1)
            power += 1
        return WideDecimal(number, self.negative, power)


def divide_by_ten(value: Decimal128) -> Decimal128:
    """Divide the mantissa of ``value`` by ten, keeping its scale and sign."""
    wide = WideDecimal.from_decimal(value)
    return WideDecimal(wide.magnitude // 10, wide.negative, wide.power).to_decimal()