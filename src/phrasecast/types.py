from __future__ import annotations

from enum import Enum


class ArgumentType(str, Enum):
    STRING = "string"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    CHAR_CODES = "charCodes"
    NUMBER = "number"
    INTEGER = "integer"
    BIGINT = "bigint"
    EMOJINT = "emojint"
    URL = "url"
    DATE = "date"
    COLOR = "color"
    USER = "user"
    USERS = "users"
    MEMBER = "member"
    MEMBERS = "members"
    RELEVANT = "relevant"
    RELEVANTS = "relevants"
    CHANNEL = "channel"
    CHANNELS = "channels"
    TEXT_CHANNEL = "textChannel"
    TEXT_CHANNELS = "textChannels"
    VOICE_CHANNEL = "voiceChannel"
    VOICE_CHANNELS = "voiceChannels"
    CATEGORY_CHANNEL = "categoryChannel"
    CATEGORY_CHANNELS = "categoryChannels"
    NEWS_CHANNEL = "newsChannel"
    NEWS_CHANNELS = "newsChannels"
    STORE_CHANNEL = "storeChannel"
    STORE_CHANNELS = "storeChannels"
    ROLE = "role"
    ROLES = "roles"
    EMOJI = "emoji"
    EMOJIS = "emojis"
    GUILD = "guild"
    GUILDS = "guilds"
    MESSAGE = "message"
    GUILD_MESSAGE = "guildMessage"
    RELEVANT_MESSAGE = "relevantMessage"
    INVITE = "invite"
    USER_MENTION = "userMention"
    MEMBER_MENTION = "memberMention"
    CHANNEL_MENTION = "channelMention"
    ROLE_MENTION = "roleMention"
    EMOJI_MENTION = "emojiMention"
    COMMAND_ALIAS = "commandAlias"
    COMMAND = "command"
    INHIBITOR = "inhibitor"
    LISTENER = "listener"

    def __str__(self) -> str:
        return self.value


CHANNEL_KINDS: tuple[str, ...] = ("text", "voice", "category", "news", "store")
