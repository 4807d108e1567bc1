# dec128

`dec128` models a 128-bit decimal value in the common four-word layout:

- words 0..2 hold a 96-bit unsigned mantissa, least significant word first;
- bits 16..23 of word 3 hold the scale, the power of ten the mantissa is
  divided by (0 to 28);
- bit 31 of word 3 holds the sign.

It provides the value type, bit-level helpers for 32-bit words, and a 192-bit
working form used to round values back into range and to bring them to a
common scale.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## The value type: `dec128.bits.Decimal128`

An immutable dataclass whose `bits` field is a tuple of four unsigned 32-bit
words. Constructing one with the wrong number of words, or with a word outside
0..2**32-1, raises `ValueError`.

```python
from dec128.bits import Decimal128

value = Decimal128.from_mantissa(12345, 2, True)   # -123.45
value.mantissa()      # 12345
value.scale()         # 2
value.is_negative()   # True
value.bits            # (12345, 0, 0, 0x80020000)

positive = value.with_sign(False)
finer = value.with_scale(4)        # same mantissa, scale 4
zero = Decimal128.zero()
```

- `from_mantissa(mantissa, scale=0, negative=False)` raises `OverflowError`
  when the mantissa does not fit 96 bits and `ValueError` when the scale is
  outside 0..28.
- `scale()` returns every bit of word 3 above bit 15 except the sign.
- `with_scale(scale)` writes bits 16..29 of word 3 and leaves the rest alone.
- `with_mantissa_of(source)` keeps the sign and scale word and takes the three
  mantissa words of `source`.

## Bit helpers in `dec128.bits`

- `get_bit(value, index)` returns a bit of a 32-bit word as 0 or 1.
- `set_bit(value, index, bit=1)` sets or clears a bit; a `bit` other than 0 or
  1 leaves the word unchanged. `clear_bit(value, index)` clears it.
- `check_bit(value, index)` returns the word masked to that bit.
- `as_uint(value)` and `as_int(value)` reinterpret a 32-bit word as unsigned
  or signed.
- `ten_pow(power)` returns 10**power for 0..38 as a `Decimal128` whose four
  words hold the 128-bit number.
- `checked_scale(value)` returns the scale in bits 16..23 and raises
  `ValueError` when it is above 28.
- `truncate_scale(value, exp)` divides the mantissa by ten `exp` times and
  clears word 3 except the sign.
- `last_dropped_digit(value, exp)` returns the last digit such a truncation
  removes.
- `drop_last_digit(value)` divides the mantissa by ten and returns
  `(new_value, removed_digit)`.
- `has_overflow_bits(value)` is true when bit 31 of the word is set together
  with any lower bit.

Bit indices outside 0..31 raise `ValueError`.

## The wide working form: `dec128.wide`

`WideDecimal` is an immutable dataclass with a 192-bit integer `magnitude`, a
`negative` flag and a `power` of ten.

```python
from dec128.bits import Decimal128
from dec128.wide import WideDecimal

wide = WideDecimal.from_decimal(Decimal128.from_mantissa(15, 1, False))
wide.normalized()          # the same value scaled up to power 28
wide.rounded()             # digits dropped until it fits 96 bits and power <= 28
wide.to_decimal()          # back to a Decimal128
wide.bit_string()          # the magnitude as 192 binary digits
print(wide.format())       # six 32-bit groups, then power and sign
```

- `to_decimal()` keeps the low 96 bits of the magnitude and the low 8 bits of
  the power.
- `rounded()` rounds the last digit it drops half to even; a tie on an even
  quotient rounds up when the digits dropped before it were not all zero.
- `has_trailing_zero()` is true when the magnitude is a multiple of ten.

The module also has operations on 192-character strings of `0` and `1`, most
significant bit first: `shift_left`, `add_bits` (a carry into the top bit
leaves that bit set), `sub_bits`, `invert`, `div10` and `mul10`; plus
`int_to_binary` (a 32-bit word to 32 digits), `binary_to_int` (the empty
string is zero) and `strip_leading_zeros`. `divide_by_ten(value)` divides the
mantissa of a `Decimal128` by ten and keeps its scale and sign.

## What the package does not do

It has no addition, subtraction, multiplication or division of `Decimal128`
values, no comparisons between them, and no conversion from or to Python
`int` or `float`. It supplies the representation and the building blocks only.