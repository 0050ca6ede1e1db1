"""Shared test fixtures: in-memory sqlite and MagicMock stand-ins for Discord objects."""

from __future__ import annotations

import itertools
import sqlite3
from typing import Iterable
from unittest.mock import AsyncMock, MagicMock

import pytest

from cogs.lotto import Lotto
from lotto.config import BotConfig
from lotto.store import SettingsStore

GUILD_ID = 1000

_message_ids = itertools.count(1)


def make_member(member_id: int) -> MagicMock:
    member = MagicMock(name=f"member-{member_id}")
    member.id = member_id
    member.mention = f"<@{member_id}>"
    return member


def make_mentionable(object_id: int, mention: str) -> MagicMock:
    obj = MagicMock()
    obj.id = object_id
    obj.mention = mention
    return obj


def make_guild(member_ids: Iterable[int] = (), guild_id: int = GUILD_ID, channels=(), roles=()) -> MagicMock:
    """A guild whose roster is ``member_ids``; get_member/get_channel/get_role resolve from it."""
    guild = MagicMock(name=f"guild-{guild_id}")
    guild.id = guild_id
    guild.name = f"Guild {guild_id}"
    guild.available = True
    set_roster(guild, member_ids)
    channel_map = {c.id: c for c in channels}
    role_map = {r.id: r for r in roles}
    guild.get_channel.side_effect = channel_map.get
    guild.get_role.side_effect = role_map.get
    return guild


def set_roster(guild: MagicMock, member_ids: Iterable[int]) -> None:
    members = [make_member(m) for m in member_ids]
    by_id = {m.id: m for m in members}
    guild.members = members
    guild.get_member.side_effect = by_id.get


def make_message(content: str, guild=None, channel_mentions=(), role_mentions=()) -> MagicMock:
    message = MagicMock(name="message")
    message.id = next(_message_ids)
    message.content = content
    message.guild = guild
    message.channel.id = 42
    message.channel_mentions = list(channel_mentions)
    message.role_mentions = list(role_mentions)
    message.reply = AsyncMock()
    return message


@pytest.fixture
def db():
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def store(db) -> SettingsStore:
    return SettingsStore(db)


@pytest.fixture
def bot(db) -> MagicMock:
    bot = MagicMock(name="bot")
    bot.db = db
    bot.config = BotConfig()
    return bot


@pytest.fixture
def cog(bot, store) -> Lotto:
    return Lotto(bot, store=store)
