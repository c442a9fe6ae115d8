"""
Deterministic grouping ids.

The hash is a 32-bit string hash (h * 31 + unit) over UTF-16 code units,
rendered as a UUID-like string so ids stay human-debuggable and reproducible
across runs. Characters outside the BMP hash as their surrogate pair. It is
not collision resistant and must not be used as a unique identifier.
"""


def _utf16_units(value: str):
    data = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_hash(value: str) -> int:
    h = 0
    for unit in _utf16_units(value):
        h = (h * 31 + unit) & 0xFFFFFFFF
    # Interpret as signed 32-bit
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def consistent_id(value: str) -> str:
    hex_hash = format(abs(string_hash(value)), "x").rjust(8, "0")
    return f"{hex_hash}-{hex_hash[0:4]}-{hex_hash[4:8]}-{hex_hash[0:4]}-{hex_hash[0:12]}"
