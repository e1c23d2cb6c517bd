"""Helpers de réponse aux interactions Discord."""

import discord


async def reply_ephemeral(ctx: discord.ApplicationContext | discord.Interaction, content: str) -> None:
    """Répond en ephemeral en gérant defer/followup automatiquement."""
    if ctx.response.is_done():
        await ctx.followup.send(content, ephemeral=True)
    else:
        await ctx.response.send_message(content, ephemeral=True)
