"""Quickstart example for braceformat.

This example demonstrates basic usage of braceformat: one-shot formats,
reusable formatters, typed arguments and error reporting.

Note: Builders must be completed with finish() (or a with block). A builder
dropped while still accumulating formats nothing and emits ResourceWarning.
"""

from braceformat import (
    Char,
    FormatError,
    Formatter,
    Pointer,
    UInt32,
    format,
    print_format,
)

# Example 1: One-shot formatting
print("=" * 50)
print("Example 1: One-Shot Formatting")
print("=" * 50)

print(format("Hello, {}!", "World").finish())
# Output: Hello, World!

print(format("{2}, {1}, {0}", "a", "b", "c").finish())
# Output: c, b, a

# Example 2: Width, fill and alignment
print("\n" + "=" * 50)
print("Example 2: Width, Fill and Alignment")
print("=" * 50)

print(format("[{:<8}] [{:>8}] [{:*^8}]", "left", "right", "mid").finish())
# Output: [left    ] [   right] [**mid***]

print(format("[{:+08d}] [{:=+8}]", 42, -42).finish())
# Output: [+0000042] [-     42]

# Example 3: Integer bases and floats
print("\n" + "=" * 50)
print("Example 3: Integer Bases and Floats")
print("=" * 50)

print(format("{0:d}; {0:#x}; {0:#X}; {0:#o}", 42).finish())
# Output: 42; 0x2a; 0X2A; 052

print(format("{:.3f} {:e} {}", 3.14159, 1234.5, 0.1).finish())
# Output: 3.142 1.234500e+03 0.1

print(format("{0:.{1}f}", 2.0 / 3.0, 4).finish())
# Output: 0.6667

# Example 4: Reusing one Formatter
print("\n" + "=" * 50)
print("Example 4: Reusing a Formatter")
print("=" * 50)

fmt = Formatter()
for row, (name, qty) in enumerate([("apples", 3), ("pears", 12)]):
    line = (fmt("{:>2}. {:<8}{:>4}") << row << name << qty).finish()
    print(line)
# Output:
#  0. apples     3
#  1. pears     12

# Example 5: Typed arguments
print("\n" + "=" * 50)
print("Example 5: Typed Arguments")
print("=" * 50)

print(format("{} {} {}", Char("A"), UInt32(7), Pointer(0x1000)).finish())
# Output: A 7 0x1000

# Example 6: Printing directly
print("\n" + "=" * 50)
print("Example 6: print_format")
print("=" * 50)

print_format("{} + {} = {}\n", 1, 2, 3).finish()
# Output: 1 + 2 = 3

with print_format("{:-^20}\n") as builder:
    builder.append("done")
# Output: --------done--------

# Example 7: Errors
print("\n" + "=" * 50)
print("Example 7: Error Reporting")
print("=" * 50)

try:
    format("{:d}", "text").finish()
except FormatError as e:
    print(f"{e.code.name if e.code else 'ERROR'}: {e}")
# Output: UNKNOWN_FORMAT_CODE: unknown format code 'd' for string

try:
    format("{0} {}", 1, 2).finish()
except FormatError as e:
    print(e.diagnostic.format_error() if e.diagnostic else e)
# Output:
# error[MANUAL_TO_AUTOMATIC_INDEXING]: cannot switch from manual to automatic argument indexing
#   --> byte 5
#   = help: Give every field an explicit index, or none of them
