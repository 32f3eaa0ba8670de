from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any

import aiohttp
import discord


# Connection drops and timeouts surface from aiohttp, outside discord.HTTPException.
TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class FetchStatus(Enum):
    FOUND = "found"
    MISSING = "missing"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FetchOutcome:
    status: FetchStatus
    message: Any = None
    error: str = ""


def parse_snowflake(phrase: str) -> int | None:
    raw = (phrase or "").strip()
    if not raw.isdigit() or not raw.isascii():
        return None
    return int(raw)


def is_malformed_request(exc: discord.HTTPException, prefix: str = "Invalid Form Body") -> bool:
    text = getattr(exc, "text", "") or str(exc)
    return str(text).startswith(prefix)


async def fetch_message(channel: Any, phrase: str, malformed_prefix: str = "Invalid Form Body") -> FetchOutcome:
    """
    Fetch a message by id from one channel.

    A phrase that is not a snowflake can never be fetched from any channel, so it
    is reported as MALFORMED alongside requests the API rejects as an invalid
    form body. Every other failure, including a dropped connection, is MISSING.
    """

    message_id = parse_snowflake(phrase)
    if message_id is None:
        return FetchOutcome(FetchStatus.MALFORMED, error="not a snowflake")
    try:
        message = await channel.fetch_message(message_id)
    except discord.HTTPException as exc:
        if is_malformed_request(exc, malformed_prefix):
            return FetchOutcome(FetchStatus.MALFORMED, error=str(exc)[:240])
        return FetchOutcome(FetchStatus.MISSING, error=str(exc)[:240])
    except TRANSIENT_ERRORS as exc:
        return FetchOutcome(FetchStatus.MISSING, error=repr(exc)[:240])
    return FetchOutcome(FetchStatus.FOUND, message=message)
