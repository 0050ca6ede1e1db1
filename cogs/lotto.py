# Lotto: rotate a "winner" through the members of a guild with plain-text commands
#   !lotto go                      advance the rotation
#   !lotto set hours|channel|role  configure the guild
#   !lotto get hours|channel|role|winner|all winner

import logging
from typing import Optional

import discord
from discord.ext import commands

from lotto.replies import NO_MENTIONS, mention_list, mention_or_unset, send_reply
from lotto.rotation import EmptyRosterError, online_winners, rotate
from lotto.router import CommandContext, CommandRouter
from lotto.settings import parse_hours
from lotto.store import SettingsStore

logger = logging.getLogger(__name__)


class Lotto(commands.Cog):
    def __init__(self, bot, store: Optional[SettingsStore] = None, prefix: Optional[str] = None):
        self.bot = bot
        self.store = store or SettingsStore(bot.db)
        self.prefix = (prefix or getattr(getattr(bot, 'config', None), 'lotto_prefix', None) or "!lotto").lower()
        self.router = CommandRouter(self.store)

        p = self.prefix
        self.router.add_route(f"{p} go", self.go)
        self.router.add_route(f"{p} set hours", self.set_hours)
        self.router.add_route(f"{p} set channel", self.set_channel)
        self.router.add_route(f"{p} set role", self.set_role)
        self.router.add_route(f"{p} get hours", self.get_hours)
        self.router.add_route(f"{p} get channel", self.get_channel)
        self.router.add_route(f"{p} get role", self.get_role)
        self.router.add_route(f"{p} get all winner", self.get_all_winners)
        self.router.add_route(f"{p} get winner", self.get_winners)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        await self.router.dispatch(message)

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        # Lotto commands are plain-text messages, not registered bot commands
        if isinstance(error, commands.CommandNotFound):
            return
        logger.error(f"Error in command {ctx.command}: {error}", exc_info=error)

    # Rotation

    async def go(self, ctx: CommandContext):
        guild = ctx.guild
        settings = ctx.settings
        roster = [member.id for member in guild.members]
        is_present = lambda member_id: guild.get_member(member_id) is not None

        logger.debug(f"go in {guild.name} ({guild.id}): {settings.to_record()}")
        logger.debug(f"* {len(roster)} members, {len(settings.winners)} winners, "
                     f"{len(online_winners(settings.winners, is_present))} winners in guild")

        try:
            rotation = rotate(settings.winners, is_present, roster)
        except EmptyRosterError:
            logger.warning(f"No members to draw a winner from in {guild.name} ({guild.id}), rotation skipped")
            return

        new_settings = settings.with_winners(rotation.winners)
        logger.debug(f"Rotated {rotation.current} -> {rotation.next} "
                     f"({'drawn' if rotation.drawn else 'next in line'}): {new_settings.to_record()}")
        await self.store.save(guild.id, new_settings)

    # Setters

    async def set_hours(self, ctx: CommandContext):
        try:
            hours = parse_hours(ctx.argument)
        except ValueError:
            shown = ctx.argument.strip().replace('`', '')
            await send_reply(ctx.message, f"❌ Hours not set: `{shown or '(nothing)'}` is not a positive whole number.", allowed_mentions=NO_MENTIONS)
            return

        new_settings = ctx.settings.with_hours(hours)
        await self.store.save(ctx.guild.id, new_settings)
        logger.debug(f"Hours set to {hours} in {ctx.guild.id}: {new_settings.to_record()}")

    async def set_channel(self, ctx: CommandContext):
        mentions = ctx.message.channel_mentions
        if not mentions:
            await send_reply(ctx.message, f"❌ Channel not set: mention a channel, e.g. `{self.prefix} set channel #lotto`.", allowed_mentions=NO_MENTIONS)
            return

        new_settings = ctx.settings.with_channel(mentions[0].id)
        await self.store.save(ctx.guild.id, new_settings)
        logger.debug(f"Channel set to {mentions[0].id} in {ctx.guild.id}: {new_settings.to_record()}")

    async def set_role(self, ctx: CommandContext):
        mentions = ctx.message.role_mentions
        if not mentions:
            await send_reply(ctx.message, f"❌ Role not set: mention a role, e.g. `{self.prefix} set role @Winner`.", allowed_mentions=NO_MENTIONS)
            return

        new_settings = ctx.settings.with_role(mentions[0].id)
        await self.store.save(ctx.guild.id, new_settings)
        logger.debug(f"Role set to {mentions[0].id} in {ctx.guild.id}: {new_settings.to_record()}")

    # Getters

    async def get_hours(self, ctx: CommandContext):
        await send_reply(ctx.message, f"hours: {ctx.settings.hours}")

    async def get_channel(self, ctx: CommandContext):
        channel_id = ctx.settings.channel_id
        channel = ctx.guild.get_channel(channel_id) if channel_id is not None else None
        await send_reply(ctx.message, f"channel: {mention_or_unset(channel)}")

    async def get_role(self, ctx: CommandContext):
        role_id = ctx.settings.role_id
        role = ctx.guild.get_role(role_id) if role_id is not None else None
        await send_reply(ctx.message, f"role: {mention_or_unset(role)}")

    async def get_all_winners(self, ctx: CommandContext):
        await send_reply(ctx.message, f"all winners: {mention_list(ctx.settings.winners)}")

    async def get_winners(self, ctx: CommandContext):
        guild = ctx.guild
        present = online_winners(ctx.settings.winners, lambda member_id: guild.get_member(member_id) is not None)
        await send_reply(ctx.message, f"winners: {mention_list(present)}")


async def setup(bot):
    await bot.add_cog(Lotto(bot))
