"""A 128-bit decimal value with a 96-bit mantissa, scale and sign, plus a wide working form."""

__version__ = "0.1.0"
__all__ = ["bits", "wide"]