# Reply text for lotto commands and sending it back to the channel

import logging
from typing import Iterable, Optional

import discord

logger = logging.getLogger(__name__)

UNSET = "unset"

# Replies may show member mentions but only ever ping users, never @everyone or roles
USER_MENTIONS = discord.AllowedMentions(everyone=False, users=True, roles=False, replied_user=True)
NO_MENTIONS = discord.AllowedMentions.none()


def member_mention(member_id: int) -> str:
    return f"<@{member_id}>"


def mention_list(member_ids: Iterable[int]) -> str:
    return "[" + ", ".join(member_mention(m) for m in member_ids) + "]"


def mention_or_unset(target: Optional[object]) -> str:
    """Channels and roles are shown as a mention, or ``unset`` when they don't resolve."""
    if target is None:
        return UNSET
    return target.mention


async def send_reply(
    message: discord.Message,
    text: str,
    allowed_mentions: discord.AllowedMentions = USER_MENTIONS,
) -> bool:
    """Reply to the message that triggered a command."""
    try:
        await message.reply(text, allowed_mentions=allowed_mentions)
        return True
    except discord.HTTPException as e:
        logger.error(f"Failed to reply in channel {message.channel.id}: {e}")
        return False
