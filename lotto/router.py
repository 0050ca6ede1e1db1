# Prefix command routing for plain-text lotto commands
#
# Every registered prefix keeps track of the message it is currently loading
# settings for. When another message with the same prefix arrives before that
# load finishes, the older one is dropped and only the newest one reaches its
# handler. Different prefixes never affect each other.

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

import discord

from lotto.settings import LottoSettings
from lotto.store import SettingsStore

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    message: discord.Message
    guild: discord.Guild
    argument: str  # lowercased text after the prefix
    settings: LottoSettings  # snapshot taken before the command runs


Handler = Callable[[CommandContext], Awaitable[None]]


class DispatchToken:
    """Marks one load-then-dispatch unit; cancelled once a newer one starts."""

    __slots__ = ('cancelled',)

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class PrefixRoute:
    def __init__(self, prefix: str, handler: Handler):
        self.prefix = prefix.lower()
        self.handler = handler
        self._token: Optional[DispatchToken] = None

    def matches(self, message: discord.Message) -> bool:
        guild = message.guild
        if guild is None or not guild.available:
            return False
        return message.content.lower().startswith(self.prefix)

    def parse(self, content: str) -> str:
        return content.lower().split(self.prefix)[-1]

    def supersede(self) -> DispatchToken:
        """Cancel the unit in flight, if any, and start a new one."""
        if self._token is not None:
            self._token.cancel()
        token = DispatchToken()
        self._token = token
        return token

    def finish(self, token: DispatchToken):
        if self._token is token:
            self._token = None


class CommandRouter:
    def __init__(self, store: SettingsStore):
        self.store = store
        self.routes: List[PrefixRoute] = []

    def add_route(self, prefix: str, handler: Handler) -> PrefixRoute:
        route = PrefixRoute(prefix, handler)
        self.routes.append(route)
        return route

    async def load_settings(self, guild_id: int) -> LottoSettings:
        """Always returns usable settings, falling back to the defaults."""
        try:
            settings = await self.store.load(guild_id)
        except Exception as e:
            logger.error(f"Failed to load settings for server {guild_id}: {e}", exc_info=True)
            settings = None
        return settings if settings is not None else LottoSettings()

    async def dispatch(self, message: discord.Message):
        matched = [route for route in self.routes if route.matches(message)]
        if not matched:
            return
        await asyncio.gather(*(self._run(route, message) for route in matched))

    async def _run(self, route: PrefixRoute, message: discord.Message):
        token = route.supersede()
        argument = route.parse(message.content)
        settings = await self.load_settings(message.guild.id)

        if token.cancelled:
            logger.debug(f"Dropped '{route.prefix}' from message {message.id}: superseded by a newer message")
            return
        route.finish(token)

        context = CommandContext(
            message=message,
            guild=message.guild,
            argument=argument,
            settings=settings,
        )
        try:
            await route.handler(context)
        except Exception as e:
            logger.error(f"Error handling '{route.prefix}' in server {message.guild.id}: {e}", exc_info=True)
