from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from phrasecast.types import CHANNEL_KINDS


@dataclass(frozen=True)
class Settings:
    mention_id_min_digits: int = 17
    mention_id_max_digits: int = 20
    malformed_request_prefix: str = "Invalid Form Body"
    message_channel_kinds: tuple[str, ...] = ("text",)
    case_sensitive: bool = False
    whole_word: bool = False
    log_echo: bool = True
    log_max_rows: int = 2000

    @staticmethod
    def load(path: Path = Path("phrasecast.txt")) -> "Settings":
        values = _parse_settings_file(path)
        min_digits = _int_value(values, "MENTION_ID_MIN_DIGITS", 17)
        max_digits = _int_value(values, "MENTION_ID_MAX_DIGITS", 20)
        prefix = values.get("MALFORMED_REQUEST_PREFIX", "Invalid Form Body").strip()
        kinds = tuple(
            kind.strip().lower()
            for kind in values.get("MESSAGE_CHANNEL_KINDS", "text").split(",")
            if kind.strip()
        )
        if min_digits < 1 or max_digits < min_digits:
            raise RuntimeError("MENTION_ID_MIN_DIGITS must be >= 1 and <= MENTION_ID_MAX_DIGITS.")
        if not prefix:
            raise RuntimeError("MALFORMED_REQUEST_PREFIX must not be empty.")
        unknown = [kind for kind in kinds if kind not in CHANNEL_KINDS]
        if unknown or not kinds:
            raise RuntimeError(f"MESSAGE_CHANNEL_KINDS must list kinds from {', '.join(CHANNEL_KINDS)}.")
        return Settings(
            mention_id_min_digits=min_digits,
            mention_id_max_digits=max_digits,
            malformed_request_prefix=prefix,
            message_channel_kinds=kinds,
            case_sensitive=_bool_value(values, "CASE_SENSITIVE", False),
            whole_word=_bool_value(values, "WHOLE_WORD", False),
            log_echo=_bool_value(values, "LOG_ECHO", True),
            log_max_rows=_int_value(values, "LOG_MAX_ROWS", 2000),
        )


def _parse_settings_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def _int_value(values: dict[str, str], key: str, default: int) -> int:
    raw = values.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{key} must be an integer, got {raw!r}.") from exc


def _bool_value(values: dict[str, str], key: str, default: bool) -> bool:
    raw = values.get(key, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise RuntimeError(f"{key} must be true or false, got {raw!r}.")
