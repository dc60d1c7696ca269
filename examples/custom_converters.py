"""Custom Converters Example - Formatting user types and direct appenders.

Values that are not numbers, strings, characters or pointers are formatted
through a converter looked up by type. This example shows:

1. The default converter (str(value) padded by string rules)
2. Registering a converter on a Formatter's private registry
3. A registry shared by one-shot format() calls
4. Subclass lookup through the MRO
5. Writing straight into the output buffer with an append transaction

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from braceformat import BasicFormatter, ConverterRegistry, Formatter, format
from braceformat.runtime import ArgWriter
from braceformat.syntax import FormatSpec


@dataclass(frozen=True)
class Money:
    """Amount in minor units with a currency code."""

    cents: int
    currency: str

    def __str__(self) -> str:
        return f"{self.currency} {self.cents / 100:.2f}"


@dataclass(frozen=True)
class Refund(Money):
    """Negative money, rendered by its base class converter."""


def write_money(writer: ArgWriter, value: Any, spec: FormatSpec) -> None:
    """Render Money as '<amount> <currency>' with the field's padding."""
    units, cents = divmod(abs(value.cents), 100)
    sign = "-" if value.cents < 0 or isinstance(value, Refund) else ""
    writer.write(f"{sign}{units:,}.{cents:02d} {value.currency}", spec)


def write_decimal(writer: ArgWriter, value: Any, spec: FormatSpec) -> None:
    """Render Decimal in fixed notation."""
    writer.write(f"{value:f}", spec)


# Example 1: Default converter
print("=" * 50)
print("Example 1: Default Converter")
print("=" * 50)

print(format("[{:>14}]", Money(123456, "EUR")).finish())
# Output: [   EUR 1234.56]

# Example 2: Per-formatter registration
print("\n" + "=" * 50)
print("Example 2: Formatter Registry")
print("=" * 50)

fmt = Formatter()
fmt.converters.register(Money, write_money)
print((fmt("[{:>14}]") << Money(123456, "EUR")).finish())
# Output: [  1,234.56 EUR]

# Example 3: Registry passed to format()
print("\n" + "=" * 50)
print("Example 3: Shared Registry")
print("=" * 50)

registry = ConverterRegistry()
registry.register(Money, write_money)


@registry.converter(Decimal)
def _decimal(writer: ArgWriter, value: Any, spec: FormatSpec) -> None:
    write_decimal(writer, value, spec)


registry.freeze()
print(format("{} / {:*<10}|", Money(5, "USD"), Decimal("1E+3"), converters=registry).finish())
# Output: 0.05 USD / 1000******|

# Example 4: Subclass lookup
print("\n" + "=" * 50)
print("Example 4: MRO Lookup")
print("=" * 50)

print(format("{}", Refund(250, "GBP"), converters=registry).finish())
# Output: -2.50 GBP

# Example 5: Append transactions
print("\n" + "=" * 50)
print("Example 5: Append Transaction")
print("=" * 50)


class Stars:
    """Writes as many '*' as fit, up to a limit."""

    def __init__(self, count: int) -> None:
        self.count = count

    def append_to(self, dest: memoryview, /) -> int:
        n = min(self.count, len(dest))
        dest[:n] = b"*" * n
        return n


out = BasicFormatter()
out.write_str("rating: ")
out.append(Stars(5))
print(out.text())
# Output: rating: *****
