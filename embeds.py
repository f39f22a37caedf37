import discord

from formatting import PREFIX, as_number, format_points, format_time
from leaderboard_api import CampaignLeaderboard, MapLeaderboard

TMX_MAP_URL = 'https://trackmania.exchange/maps/{tmx_id}'

COOLDOWN_NOTICE = "⏳ Wait a moment (cooldown)."
UNKNOWN_COMMAND = "Unknown command."
NO_CAMPAIGN_RECORDS = "No campaign top 10 found."
CAMPAIGN_PLACEHOLDER = "⏳ Fetching India Top 10 for current campaign..."


def map_usage(prefix: str = PREFIX) -> str:
    return f"❌ Use: `{prefix}map <tmxId>` (example: `{prefix}map 273080`)"


def map_placeholder(tmx_id: str) -> str:
    return f"⏳ Fetching India Top 10 for TMX **{tmx_id}**..."


def no_map_records(tmx_id: str) -> str:
    return f"No Indian records found for TMX id **{tmx_id}**."


def help_embed(prefix: str = PREFIX) -> discord.Embed:
    """Static command list shown for help, unknown commands and usage errors"""
    embed = discord.Embed(
        title="🏁 Commands",
        description="\n".join([
            f"**{prefix}map <tmxId>** - India Top 10 for a TMX map",
            f"**{prefix}all** - India Top 10 (current official campaign points)",
            f"**{prefix}help** - show this help",
            "",
            "Notes:",
            "• Map leaderboards can be slow or incomplete on some tracks (very large leaderboards / campaign maps).",
            "• This bot is best for TMX maps (not official campaign track leaderboards).",
            "",
            "Examples:",
            f"• `{prefix}map 273080`",
            f"• `{prefix}all`",
            "",
            "For any concerns or information contact @Youtichz",
        ]),
        color=discord.Color.blue()
    )
    embed.set_footer(text=f"Aliases: {prefix}h, {prefix}m, {prefix}a, {prefix}campaign")
    return embed


def map_embed(board: MapLeaderboard) -> discord.Embed:
    lines = []
    for i, record in enumerate(board.records, 1):
        time_str = format_time(record.time)
        lines.append(f"**{i}.** {record.player} — **{time_str}** · World **#{record.world_position}**")

    author_time = format_time(board.author_time) if as_number(board.author_time) is not None else "—"

    embed = discord.Embed(
        title=board.title,
        url=TMX_MAP_URL.format(tmx_id=board.tmx_id),
        description="\n".join(lines),
        color=discord.Color.orange()
    )
    embed.add_field(name="Author", value=board.author, inline=True)
    embed.add_field(name="Author Time", value=author_time, inline=True)
    embed.add_field(name="TMX ID", value=str(board.tmx_id), inline=True)

    if board.thumbnail:
        embed.set_image(url=board.thumbnail)
    if board.map_uid:
        embed.set_footer(text=f"mapUid: {board.map_uid}")

    return embed


def campaign_embed(board: CampaignLeaderboard) -> discord.Embed:
    lines = [
        f"**{i}.** {record.player} - **{format_points(record.points)}** pts"
        for i, record in enumerate(board.records, 1)
    ]

    embed = discord.Embed(
        title=f"India Top 10 — {board.name}",
        description="\n".join(lines),
        color=discord.Color.green()
    )
    embed.set_footer(text=f"seasonUid: {board.season_uid}")
    return embed
