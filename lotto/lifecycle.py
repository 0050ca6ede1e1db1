# Connection lifecycle logging: first ready, reconnects and client errors

import logging

from discord.ext import commands

logger = logging.getLogger(__name__)


class ConnectionLifecycle:
    def __init__(self):
        self.ready_count = 0

    def on_ready(self, bot: commands.Bot) -> bool:
        """Log a ready event. Returns True only for the first one."""
        self.ready_count += 1
        if self.ready_count > 1:
            logger.info("Reconnected")
            return False

        logger.info("Connected.")
        logger.info("Logged in as:")
        logger.info(f"* {bot.user.name}")
        logger.info(f"* {bot.user.id}")

        logger.debug(f"In {len(bot.guilds)} guilds:")
        for guild in bot.guilds:
            logger.debug(f"* {guild.name} ({guild.id})")
        return True

    def on_resumed(self):
        logger.info("Reconnected (session resumed)")

    def on_error(self, event: str):
        logger.error(f"Error in event {event}", exc_info=True)
