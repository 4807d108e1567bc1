from decimal import ROUND_HALF_EVEN, Decimal

import pytest

from dec128.bits import Decimal128
from dec128.wide import (
    WideDecimal,
    add_bits,
    binary_to_int,
    div10,
    divide_by_ten,
    int_to_binary,
    invert,
    mul10,
    shift_left,
    strip_leading_zeros,
    sub_bits,
)

MAX_MANTISSA = 79228162514264337593543950335


def wide(number: int) -> str:
    return format(number, "0192b")


@pytest.mark.parametrize("number", [0, 1, 10, 0x80000000, 0xFFFFFFFF, 3244234255])
def test_int_to_binary_round_trip(number):
    bits = int_to_binary(number)
    assert len(bits) == 32
    assert binary_to_int(bits) == number


@pytest.mark.parametrize("number", [-1, 1 << 32])
def test_int_to_binary_rejects_out_of_range(number):
    with pytest.raises(ValueError):
        int_to_binary(number)


def test_binary_to_int_empty_and_invalid():
    assert binary_to_int("") == 0
    assert binary_to_int("1010") == 10
    with pytest.raises(ValueError):
        binary_to_int("102")


@pytest.mark.parametrize("bits", ["0001011", "1", "000", "", "1000"])
def test_strip_leading_zeros_keeps_value(bits):
    stripped = strip_leading_zeros(bits)
    assert binary_to_int(stripped) == binary_to_int(bits)
    assert stripped == "" or stripped.startswith("1")
    assert bits.endswith(stripped)


def test_shift_left_multiplies_and_drops_overflow():
    assert binary_to_int(shift_left(wide(12345), 3)) == 12345 << 3
    assert shift_left("1" + "0" * 191, 1) == "0" * 192


@pytest.mark.parametrize("first,second", [(0, 0), (1, 1), (MAX_MANTISSA, 7), (12345, 67890)])
def test_add_bits_matches_integer_sum(first, second):
    assert binary_to_int(add_bits(wide(first), wide(second))) == first + second


def test_add_bits_carry_into_top_keeps_top_bit():
    assert add_bits("1" * 192, wide(1)) == "1" + "0" * 191


@pytest.mark.parametrize("first,second", [(10, 3), (MAX_MANTISSA, MAX_MANTISSA), (125, 120), (5, 0)])
def test_sub_bits_inverts_addition(first, second):
    difference = sub_bits(wide(first), wide(second))
    assert binary_to_int(add_bits(difference, wide(second))) == first


def test_sub_bits_of_equal_values_is_zero():
    assert sub_bits(wide(MAX_MANTISSA), wide(MAX_MANTISSA)) == "0" * 192


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        add_bits("101", wide(1))


def test_invert_twice_is_identity():
    bits = wide(MAX_MANTISSA)
    flipped = invert(bits)
    assert len(flipped) == len(bits)
    assert invert(flipped) == bits
    assert binary_to_int(flipped) + binary_to_int(bits) == (1 << 192) - 1


@pytest.mark.parametrize("number", [0, 9, 10, 19, 1010, MAX_MANTISSA, 10**50 + 3])
def test_div10_is_floor_division(number):
    assert binary_to_int(div10(wide(number))) == number // 10


@pytest.mark.parametrize("number,count", [(0, 1), (7, 1), (MAX_MANTISSA, 2), (123, 5)])
def test_mul10_multiplies_by_powers_of_ten(number, count):
    assert binary_to_int(mul10(wide(number), count)) == number * 10**count


def test_mul10_zero_count_is_identity():
    assert mul10(wide(42), 0) == wide(42)


def test_mul10_then_div10_round_trip():
    bits = wide(MAX_MANTISSA)
    assert div10(mul10(bits, 1)) == bits


def test_from_decimal_to_decimal_round_trip():
    value = Decimal128.from_mantissa(MAX_MANTISSA, 28, True)
    wide_value = WideDecimal.from_decimal(value)
    assert wide_value.magnitude == MAX_MANTISSA
    assert wide_value.power == 28
    assert wide_value.negative is True
    assert wide_value.to_decimal() == value


def test_max_words_widen_to_max_mantissa():
    value = Decimal128((0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0x80000000))
    wide_value = WideDecimal.from_decimal(value)
    assert wide_value.magnitude == MAX_MANTISSA
    assert wide_value.negative is True


def test_to_decimal_keeps_low_bits_and_low_power_byte():
    narrowed = WideDecimal((1 << 96) + 7, False, -1).to_decimal()
    assert narrowed.mantissa() == 7
    assert narrowed.scale() == 255


def test_magnitude_must_fit():
    with pytest.raises(ValueError):
        WideDecimal(1 << 192)


def test_bit_string_and_format():
    value = WideDecimal(MAX_MANTISSA, True, 5)
    bits = value.bit_string()
    assert binary_to_int(bits) == MAX_MANTISSA
    text = value.format()
    assert text.endswith("  pow: 5  sign: 1 \n\n")
    first_line = text.split("\n")[0]
    assert first_line.split() == [bits[0:32], bits[32:64], bits[64:96]]


@pytest.mark.parametrize("number,expected", [(120, True), (121, False), (0, True), (MAX_MANTISSA, False)])
def test_has_trailing_zero(number, expected):
    assert WideDecimal(number).has_trailing_zero() is expected


def test_normalized_scales_to_28():
    value = WideDecimal(12345, True, 3).normalized()
    assert value.power == 28
    assert value.magnitude == 12345 * 10**25
    assert value.negative is True


def test_rounded_leaves_fitting_values_alone():
    value = WideDecimal(MAX_MANTISSA, False, 28)
    assert value.rounded() == value


@pytest.mark.parametrize("number,power", [(15, 29), (25, 29), (26, 29), (24, 29), (135, 30), (999, 30)])
def test_rounded_reduces_power_half_even(number, power):
    result = WideDecimal(number, False, power).rounded()
    expected = (Decimal(number).scaleb(-power)).quantize(Decimal(1).scaleb(-28), ROUND_HALF_EVEN)
    assert result.power == 28
    assert Decimal(result.magnitude).scaleb(-28) == expected


def test_rounded_shrinks_oversized_magnitude():
    result = WideDecimal((2**96 - 1) * 10 + 7, True, 3).rounded()
    assert result.magnitude < 2**96
    assert result.power == 1
    assert result.negative is True


def test_divide_by_ten_keeps_scale_and_sign():
    value = Decimal128.from_mantissa(12345, 3, True)
    result = divide_by_ten(value)
    assert result.mantissa() == 12345 // 10
    assert result.scale() == 3
    assert result.is_negative() is True