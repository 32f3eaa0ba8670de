from __future__ import annotations

import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Optional

import discord
from yarl import URL

from phrasecast.types import ArgumentType


_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NUMERIC_RE = re.compile(r"\s*(?:[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)\s*")
_HEX_PREFIX_RE = re.compile(r"[0-9A-F]+")
_KEYCAP_RE = re.compile("([0-9])\ufe0f?\u20e3|\U0001f51f")
_ANGLE_WRAPPED_RE = re.compile(r"^<.+>$", re.DOTALL)

DATE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y %H:%M",
    "%b %d, %Y %H:%M",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
)

NAMED_COLOURS: tuple[str, ...] = (
    "default",
    "teal",
    "dark_teal",
    "brand_green",
    "green",
    "dark_green",
    "blue",
    "dark_blue",
    "purple",
    "dark_purple",
    "magenta",
    "dark_magenta",
    "gold",
    "dark_gold",
    "orange",
    "dark_orange",
    "brand_red",
    "red",
    "dark_red",
    "lighter_grey",
    "light_grey",
    "dark_grey",
    "darker_grey",
    "og_blurple",
    "blurple",
    "greyple",
    "dark_theme",
    "fuchsia",
    "yellow",
    "pink",
)


def parse_int_prefix(phrase: str) -> Optional[int]:
    match = _INT_PREFIX_RE.match(phrase)
    return int(match.group(1)) if match else None


def parse_float_prefix(phrase: str) -> Optional[float]:
    match = _FLOAT_PREFIX_RE.match(phrase)
    return float(match.group(1)) if match else None


def cast_string(ctx: Any, phrase: str) -> Optional[str]:
    return phrase or None


def cast_lowercase(ctx: Any, phrase: str) -> Optional[str]:
    return phrase.lower() if phrase else None


def cast_uppercase(ctx: Any, phrase: str) -> Optional[str]:
    return phrase.upper() if phrase else None


def cast_char_codes(ctx: Any, phrase: str) -> Optional[list[int]]:
    if not phrase:
        return None
    return [ord(char) for char in phrase]


def cast_number(ctx: Any, phrase: str) -> Optional[float]:
    if not phrase:
        return None
    return parse_float_prefix(phrase)


def cast_integer(ctx: Any, phrase: str) -> Optional[int]:
    if not phrase:
        return None
    return parse_int_prefix(phrase)


def cast_bigint(ctx: Any, phrase: str) -> Optional[int]:
    """
    Parse an arbitrary-precision integer.

    Non-numeric phrases give None, but a numeric literal that is not an integer
    ("1.5", "1e3") raises ValueError from int() and is left to the caller.
    """

    if not phrase or not _NUMERIC_RE.fullmatch(phrase):
        return None
    text = phrase.strip()
    if text[:2].lower() in ("0x", "0o", "0b"):
        return int(text, 0)
    return int(text)


def decode_emojint(phrase: str) -> str:
    return _KEYCAP_RE.sub(lambda m: m.group(1) if m.group(1) is not None else "10", phrase)


def cast_emojint(ctx: Any, phrase: str) -> Optional[int]:
    if not phrase:
        return None
    return parse_int_prefix(decode_emojint(phrase))


def cast_url(ctx: Any, phrase: str) -> Optional[URL]:
    if not phrase:
        return None
    if _ANGLE_WRAPPED_RE.match(phrase):
        phrase = phrase[1:-1]
    try:
        url = URL(phrase)
    except (ValueError, TypeError):
        return None
    if not url.is_absolute() or not url.scheme:
        return None
    return url


def parse_date(phrase: str) -> Optional[datetime]:
    text = phrase.strip()
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is not None:
        return parsed
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def cast_date(ctx: Any, phrase: str) -> Optional[datetime]:
    if not phrase:
        return None
    return parse_date(phrase)


def resolve_color(value: str) -> int:
    """Resolve an upper-cased colour name or hex string to a 24-bit value."""
    if value == "RANDOM":
        return discord.Colour.random().value
    factory = getattr(discord.Colour, value.lower(), None) if value.lower() in NAMED_COLOURS else None
    if factory is not None:
        return int(factory().value)
    text = value
    if text.startswith("#"):
        text = text[1:]
    elif text.startswith("0X"):
        text = text[2:]
    match = _HEX_PREFIX_RE.match(text)
    if not match:
        raise ValueError(f"Unable to resolve colour {value!r}")
    color = int(match.group(0), 16)
    if color > 0xFFFFFF:
        raise ValueError(f"Colour {value!r} is outside the 24-bit range")
    return color


def cast_color(ctx: Any, phrase: str) -> Optional[int]:
    if not phrase:
        return None
    try:
        return resolve_color(phrase.upper())
    except (ValueError, TypeError):
        return None


SCALAR_CASTERS: dict[str, Callable[[Any, str], Any]] = {
    ArgumentType.STRING: cast_string,
    ArgumentType.LOWERCASE: cast_lowercase,
    ArgumentType.UPPERCASE: cast_uppercase,
    ArgumentType.CHAR_CODES: cast_char_codes,
    ArgumentType.NUMBER: cast_number,
    ArgumentType.INTEGER: cast_integer,
    ArgumentType.BIGINT: cast_bigint,
    ArgumentType.EMOJINT: cast_emojint,
    ArgumentType.URL: cast_url,
    ArgumentType.DATE: cast_date,
    ArgumentType.COLOR: cast_color,
}
