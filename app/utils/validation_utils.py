import math
import re
from typing import Any, Optional, Union

# Decimal literal with optional sign, fraction and exponent ("12", "-1.5", ".5", "1e3")
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
# Unsigned hex/binary/octal integer literals ("0x1F", "0b101", "0o17")
_PREFIXED_INT_RE = re.compile(r"^0([xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)$")

Number = Union[int, float]


def is_missing(value: Any) -> bool:
    """True for values a client can send that count as "not provided".

    None, False, empty string, zero and NaN are missing. Lists and dicts are
    present even when empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    return False


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def parse_number(value: Any) -> float:
    """Parse a client value as a real number, returning NaN when it is not one.

    Booleans count as 0/1, numeric strings (decimal, exponent, 0x/0b/0o) are
    parsed after stripping whitespace and an empty string is 0. A list is
    read through its only element, an empty list is 0. Integers beyond float
    range become +/-inf. Callers reject non-finite results.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, list):
        if not value:
            return 0.0
        if len(value) > 1 or isinstance(value[0], bool):
            return math.nan
        if value[0] is None:
            return 0.0
        return parse_number(value[0])
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if _PREFIXED_INT_RE.match(text):
            return _int_to_float(int(text, 0))
        if not _NUMBER_RE.match(text):
            return math.nan
        try:
            return float(text)
        except (ValueError, OverflowError):
            return math.nan
    return math.nan


def to_json_number(value: float) -> Number:
    """Collapse integral floats so 100.0 serializes as 100."""
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def parse_page_param(raw: Optional[str], default: int) -> Number:
    """Parse a page/pageSize query value, using the default when it is absent, non-numeric or <= 0."""
    if raw is None or raw == "":
        return default
    parsed = parse_number(raw)
    if not math.isfinite(parsed) or parsed <= 0:
        return default
    return to_json_number(parsed)
