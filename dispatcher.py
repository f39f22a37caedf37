from typing import Optional, Tuple

import discord

from cooldown import CooldownTracker
from embeds import (
    CAMPAIGN_PLACEHOLDER,
    COOLDOWN_NOTICE,
    NO_CAMPAIGN_RECORDS,
    UNKNOWN_COMMAND,
    campaign_embed,
    help_embed,
    map_embed,
    map_placeholder,
    map_usage,
    no_map_records,
)
from formatting import PREFIX, ParsedCommand, is_likely_tmx_id, parse_command, truncate
from leaderboard_api import ErrorKind, LeaderboardAPI, LeaderboardError, ValidationError

HELP_COMMANDS = ('help', 'h')
MAP_COMMANDS = ('map', 'm')
CAMPAIGN_COMMANDS = ('all', 'a', 'campaign')


class CommandDispatcher:
    """Routes prefixed chat messages to leaderboard replies.

    Every failure after the cooldown check ends up as a reply to the user;
    nothing raised while handling one message escapes `handle_message`.
    """

    def __init__(self, api: LeaderboardAPI, cooldowns: Optional[CooldownTracker] = None,
                 prefix: str = PREFIX, refresh_campaign: bool = False):
        self.api = api
        self.cooldowns = cooldowns if cooldowns is not None else CooldownTracker()
        self.prefix = prefix
        self.refresh_campaign = refresh_campaign

    async def handle_message(self, message: discord.Message):
        if message.author.bot:
            return

        command = parse_command(message.content, self.prefix)
        if command is None:
            return

        if not self.cooldowns.check_and_record(message.author.id):
            await self.reply_quietly(message, COOLDOWN_NOTICE)
            return

        try:
            await self.dispatch(message, command)
        except Exception as e:
            print(f"❌ Command '{command.name}' from {message.author.id} failed: {e!r}")
            content, embed = self.describe_error(e)
            await self.reply_quietly(message, content, embed)

    async def reply_quietly(self, message: discord.Message, content: str,
                            embed: Optional[discord.Embed] = None):
        """Reply without raising; used where no further error reply is possible"""
        try:
            if embed is None:
                await message.reply(content)
            else:
                await message.reply(content=content, embed=embed)
        except discord.HTTPException as send_error:
            print(f"⚠️ Could not deliver reply to {message.author.id}: {send_error}")

    async def dispatch(self, message: discord.Message, command: ParsedCommand):
        if command.name in HELP_COMMANDS:
            await message.reply(embed=help_embed(self.prefix))
        elif command.name in MAP_COMMANDS:
            await self.show_map(message, command.args)
        elif command.name in CAMPAIGN_COMMANDS:
            await self.show_campaign(message)
        else:
            await message.reply(content=UNKNOWN_COMMAND, embed=help_embed(self.prefix))

    async def show_map(self, message: discord.Message, args):
        tmx_id = (args[0] if args else '').strip()
        if not is_likely_tmx_id(tmx_id):
            raise ValidationError(map_usage(self.prefix))

        thinking = await message.reply(map_placeholder(tmx_id))
        board = await self.api.map_top10(tmx_id)

        if not board.records:
            await thinking.edit(content=no_map_records(tmx_id))
            return

        await thinking.edit(content=None, embed=map_embed(board))

    async def show_campaign(self, message: discord.Message):
        thinking = await message.reply(CAMPAIGN_PLACEHOLDER)

        if self.refresh_campaign:
            await self.api.refresh_campaign()

        board = await self.api.campaign_top10()
        if not board.records:
            await thinking.edit(content=NO_CAMPAIGN_RECORDS)
            return

        await thinking.edit(content=None, embed=campaign_embed(board))

    def describe_error(self, error: Exception) -> Tuple[str, Optional[discord.Embed]]:
        """Pick the user-facing reply for a failed command"""
        if not isinstance(error, LeaderboardError):
            return f"❌ {truncate(str(error) or type(error).__name__)}", None

        if error.kind is ErrorKind.VALIDATION:
            return truncate(str(error)), help_embed(self.prefix)
        if error.kind is ErrorKind.TRANSPORT:
            return f"🔌 {truncate(str(error))}", None
        # API and MALFORMED messages already carry status and body excerpt
        return f"❌ {truncate(str(error))}", None
