from __future__ import annotations

from typing import Any, Callable, Mapping

from phrasecast.context import CastContext
from phrasecast.resolver import ClientUtil, keyed
from phrasecast.types import CHANNEL_KINDS, ArgumentType


Collection = Mapping[int, Any]
CollectionAccessor = Callable[[CastContext], Collection]
Caster = Callable[[CastContext, str], Any]


def users_of(ctx: CastContext) -> Collection:
    return keyed(ctx.client.users)


def members_of(ctx: CastContext) -> Collection:
    return keyed(ctx.guild.members)


def channels_of(ctx: CastContext) -> Collection:
    return keyed(ctx.guild.channels)


def roles_of(ctx: CastContext) -> Collection:
    return keyed(ctx.guild.roles)


def emojis_of(ctx: CastContext) -> Collection:
    return keyed(ctx.guild.emojis)


def guilds_of(ctx: CastContext) -> Collection:
    return keyed(ctx.client.guilds)


def channel_kind(channel: Any) -> str:
    kind = getattr(channel, "type", None)
    return str(getattr(kind, "name", kind))


def channels_of_kind(kind: str) -> CollectionAccessor:
    def accessor(ctx: CastContext) -> Collection:
        return {cid: channel for cid, channel in channels_of(ctx).items() if channel_kind(channel) == kind}

    return accessor


def entity_caster(resolve: Callable[[str, Collection], Any], collection_of: CollectionAccessor, plural: bool = False) -> Caster:
    """
    Build a caster that searches `collection_of(ctx)` with `resolve`.

    Plural casters fold an empty result into None.
    """

    def caster(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        found = resolve(phrase, collection_of(ctx))
        if plural:
            return found or None
        return found

    return caster


def as_user(person: Any) -> Any:
    """Unwrap a discord.Member to the User it wraps on the private `_user` slot."""
    return getattr(person, "_user", person)


def _relevant_scope(ctx: CastContext) -> tuple[Collection, bool]:
    if ctx.is_private:
        people = [p for p in (getattr(ctx.channel, "recipient", None), getattr(ctx.client, "user", None)) if p is not None]
        return keyed(people), False
    if ctx.is_guild_channel:
        return members_of(ctx), True
    return users_of(ctx), False


def relevant_caster(oracle: ClientUtil, plural: bool = False) -> Caster:
    def caster(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        collection, as_members = _relevant_scope(ctx)
        if not plural:
            if as_members:
                person = oracle.resolve_member(phrase, collection)
                return as_user(person) if person is not None else None
            return oracle.resolve_user(phrase, collection)
        if as_members:
            persons = {pid: as_user(member) for pid, member in oracle.resolve_members(phrase, collection).items()}
        else:
            persons = oracle.resolve_users(phrase, collection)
        return persons or None

    return caster


_SUBTYPE_NAMES: dict[str, tuple[str, str]] = {
    "text": (ArgumentType.TEXT_CHANNEL, ArgumentType.TEXT_CHANNELS),
    "voice": (ArgumentType.VOICE_CHANNEL, ArgumentType.VOICE_CHANNELS),
    "category": (ArgumentType.CATEGORY_CHANNEL, ArgumentType.CATEGORY_CHANNELS),
    "news": (ArgumentType.NEWS_CHANNEL, ArgumentType.NEWS_CHANNELS),
    "store": (ArgumentType.STORE_CHANNEL, ArgumentType.STORE_CHANNELS),
}


def build_entity_casters(oracle: ClientUtil) -> dict[str, Caster]:
    casters: dict[str, Caster] = {
        ArgumentType.USER: entity_caster(oracle.resolve_user, users_of),
        ArgumentType.USERS: entity_caster(oracle.resolve_users, users_of, plural=True),
        ArgumentType.MEMBER: entity_caster(oracle.resolve_member, members_of),
        ArgumentType.MEMBERS: entity_caster(oracle.resolve_members, members_of, plural=True),
        ArgumentType.RELEVANT: relevant_caster(oracle),
        ArgumentType.RELEVANTS: relevant_caster(oracle, plural=True),
        ArgumentType.CHANNEL: entity_caster(oracle.resolve_channel, channels_of),
        ArgumentType.CHANNELS: entity_caster(oracle.resolve_channels, channels_of, plural=True),
        ArgumentType.ROLE: entity_caster(oracle.resolve_role, roles_of),
        ArgumentType.ROLES: entity_caster(oracle.resolve_roles, roles_of, plural=True),
        ArgumentType.EMOJI: entity_caster(oracle.resolve_emoji, emojis_of),
        ArgumentType.EMOJIS: entity_caster(oracle.resolve_emojis, emojis_of, plural=True),
        ArgumentType.GUILD: entity_caster(oracle.resolve_guild, guilds_of),
        ArgumentType.GUILDS: entity_caster(oracle.resolve_guilds, guilds_of, plural=True),
    }
    for kind in CHANNEL_KINDS:
        single_name, plural_name = _SUBTYPE_NAMES[kind]
        accessor = channels_of_kind(kind)
        casters[single_name] = entity_caster(oracle.resolve_channel, accessor)
        casters[plural_name] = entity_caster(oracle.resolve_channels, accessor, plural=True)
    return casters
