from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from phrasecast.utils.discord_utils import parse_snowflake


T = TypeVar("T")

USER_MENTION_RE = re.compile(r"<@!?(\d+)>")
CHANNEL_MENTION_RE = re.compile(r"<#(\d+)>")
ROLE_MENTION_RE = re.compile(r"<@&(\d+)>")
EMOJI_MENTION_RE = re.compile(r"<a?:\w+:(\d+)>")

# Lower index wins.
MATCH_TIERS = ("id", "mention", "exact", "casefold", "partial")


def normalize_token(text: str) -> str:
    return re.sub(r"[\W_]+", "", (text or "").strip().casefold())


def keyed(items: Iterable[T]) -> dict[int, T]:
    """Key a discord.py cache sequence by snowflake id, keeping cache order."""
    return {int(item.id): item for item in items}


def _user_labels(user: Any) -> list[str]:
    name = getattr(user, "name", None)
    labels = [name, getattr(user, "global_name", None)]
    discriminator = getattr(user, "discriminator", None)
    if name and discriminator and discriminator != "0":
        labels.append(f"{name}#{discriminator}")
    return [label for label in labels if label]


def _member_labels(member: Any) -> list[str]:
    labels = _user_labels(member)
    for extra in (getattr(member, "display_name", None), getattr(member, "nick", None)):
        if extra and extra not in labels:
            labels.append(extra)
    return labels


def _name_label(obj: Any) -> list[str]:
    name = getattr(obj, "name", None)
    return [name] if name else []


def _strip_channel(phrase: str) -> str:
    return phrase[1:] if phrase.startswith("#") else phrase


def _strip_role(phrase: str) -> str:
    return phrase[1:] if phrase.startswith("@") else phrase


def _strip_emoji(phrase: str) -> str:
    if len(phrase) > 2 and phrase.startswith(":") and phrase.endswith(":"):
        return phrase[1:-1]
    return phrase


class ClientUtil:
    """
    Default fuzzy-match oracle over keyed discord.py collections.

    Each object is scored into one of MATCH_TIERS. `resolve_*` returns the first
    object (in collection order) of the best tier present; `resolve_*s` returns
    every object that matched any tier.
    """

    def __init__(self, case_sensitive: bool = False, whole_word: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self.whole_word = whole_word

    def match_tier(
        self,
        phrase: str,
        obj: Any,
        labels: list[str],
        mention_re: Optional[re.Pattern[str]] = None,
        cleaned: Optional[str] = None,
    ) -> Optional[int]:
        obj_id = str(getattr(obj, "id", ""))
        if phrase == obj_id:
            return 0
        if mention_re is not None:
            match = mention_re.fullmatch(phrase)
            if match and match.group(1) == obj_id:
                return 1
        text = phrase if cleaned is None else cleaned
        if not labels or not text:
            return None
        if text in labels or phrase in labels:
            return 2
        if not self.case_sensitive:
            folded = text.casefold()
            if any(label.casefold() == folded for label in labels):
                return 3
        if not self.whole_word:
            if self.case_sensitive:
                if any(text in label for label in labels):
                    return 4
            else:
                norm = normalize_token(text)
                if norm and any(norm in normalize_token(label) for label in labels):
                    return 4
        return None

    def _rank(
        self,
        phrase: str,
        collection: Mapping[int, T],
        labels: Callable[[Any], list[str]],
        mention_re: Optional[re.Pattern[str]],
        strip: Optional[Callable[[str], str]],
    ) -> list[tuple[int, T]]:
        cleaned = strip(phrase) if strip else phrase
        ranked: list[tuple[int, T]] = []
        for obj in collection.values():
            tier = self.match_tier(phrase, obj, labels(obj), mention_re, cleaned)
            if tier is not None:
                ranked.append((tier, obj))
        return ranked

    def _resolve_one(
        self,
        phrase: str,
        collection: Mapping[int, T],
        labels: Callable[[Any], list[str]],
        mention_re: Optional[re.Pattern[str]] = None,
        strip: Optional[Callable[[str], str]] = None,
    ) -> Optional[T]:
        snowflake = parse_snowflake(phrase)
        if snowflake is not None:
            direct = collection.get(snowflake)
            if direct is not None:
                return direct
        best: Optional[tuple[int, T]] = None
        for tier, obj in self._rank(phrase, collection, labels, mention_re, strip):
            if best is None or tier < best[0]:
                best = (tier, obj)
        return best[1] if best else None

    def _resolve_many(
        self,
        phrase: str,
        collection: Mapping[int, T],
        labels: Callable[[Any], list[str]],
        mention_re: Optional[re.Pattern[str]] = None,
        strip: Optional[Callable[[str], str]] = None,
    ) -> dict[int, T]:
        return {
            int(obj.id): obj  # type: ignore[attr-defined]
            for _, obj in self._rank(phrase, collection, labels, mention_re, strip)
        }

    def resolve_user(self, phrase: str, users: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, users, _user_labels, USER_MENTION_RE)

    def resolve_users(self, phrase: str, users: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, users, _user_labels, USER_MENTION_RE)

    def resolve_member(self, phrase: str, members: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, members, _member_labels, USER_MENTION_RE)

    def resolve_members(self, phrase: str, members: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, members, _member_labels, USER_MENTION_RE)

    def resolve_channel(self, phrase: str, channels: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, channels, _name_label, CHANNEL_MENTION_RE, _strip_channel)

    def resolve_channels(self, phrase: str, channels: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, channels, _name_label, CHANNEL_MENTION_RE, _strip_channel)

    def resolve_role(self, phrase: str, roles: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, roles, _name_label, ROLE_MENTION_RE, _strip_role)

    def resolve_roles(self, phrase: str, roles: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, roles, _name_label, ROLE_MENTION_RE, _strip_role)

    def resolve_emoji(self, phrase: str, emojis: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, emojis, _name_label, EMOJI_MENTION_RE, _strip_emoji)

    def resolve_emojis(self, phrase: str, emojis: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, emojis, _name_label, EMOJI_MENTION_RE, _strip_emoji)

    def resolve_guild(self, phrase: str, guilds: Mapping[int, T]) -> Optional[T]:
        return self._resolve_one(phrase, guilds, _name_label)

    def resolve_guilds(self, phrase: str, guilds: Mapping[int, T]) -> dict[int, T]:
        return self._resolve_many(phrase, guilds, _name_label)
