"""Module de réécriture du pseudo serveur avec le niveau total : "<nom> [Lvl N]"."""

import logging
import re
from enum import Enum

import discord

from habitquest.defaults import NICKNAME_MAX_LENGTH

log = logging.getLogger(__name__)

_LEVEL_SUFFIX_RE = re.compile(r"\s*\[Lvl \d+\]$")


class NicknameOutcome(Enum):
    """Issue d'une tentative de renommage (jamais remontée au membre)."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FORBIDDEN = "forbidden"
    FAILED = "failed"


def format_level_nickname(display_name: str, level: int, *, limit: int = NICKNAME_MAX_LENGTH) -> str:
    """Retire un éventuel suffixe de niveau, tronque le nom et ajoute " [Lvl N]" sans dépasser `limit`."""
    base = _LEVEL_SUFFIX_RE.sub("", display_name)
    suffix = f" [Lvl {level}]"
    max_base = max(limit - len(suffix), 0)
    return f"{base[:max_base]}{suffix}"


async def apply_level_nickname(member: discord.Member, level: int) -> NicknameOutcome:
    """Applique le pseudo de niveau au membre ; les refus et erreurs Discord sont journalisés, pas levés."""
    new_nick = format_level_nickname(member.display_name, level)
    if new_nick == member.display_name:
        return NicknameOutcome.UNCHANGED

    try:
        await member.edit(nick=new_nick, reason="Mise à jour du niveau")
    except discord.Forbidden:
        log.warning(
            "Pseudo: permissions insuffisantes (guild_id=%s, user_id=%s)",
            getattr(member.guild, "id", None),
            member.id,
        )
        return NicknameOutcome.FORBIDDEN
    except discord.HTTPException as e:
        log.warning(
            "Pseudo: échec de la mise à jour (guild_id=%s, user_id=%s): %s",
            getattr(member.guild, "id", None),
            member.id,
            e,
        )
        return NicknameOutcome.FAILED

    return NicknameOutcome.UPDATED
