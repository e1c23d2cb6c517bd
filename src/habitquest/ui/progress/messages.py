"""Module de rendu texte des réponses de progression (/log, /stats, annonce vocale) et des erreurs."""

from habitquest.exceptions import progress as exc
from habitquest.exceptions.base import AppError
from habitquest.features.progress.catalog import Activity, StatSchema
from habitquest.features.progress.handler import LogResult, StatLine, StatsSnapshot
from habitquest.features.progress.levels import LevelProgress


def _stat_label(name: str) -> str:
    return name.replace("_", " ").title()


def _total_line(progress: LevelProgress) -> str:
    return f"**Total Level {progress.level}** ({progress.current_xp}/{progress.next_level_xp} XP)"


def _grant_line(activity: Activity, minutes: int, xp: int) -> str:
    if activity.multiplier == 1:
        amount = f"{minutes} min"
    else:
        amount = f"{minutes} min x{float(activity.multiplier):g}"
    return f"{activity.label}: {amount} → +{xp} XP ({_stat_label(activity.stat)})"


def render_log_result(result: LogResult, schema: StatSchema) -> str:
    """Retourne la réponse de /log : une ligne par activité puis le niveau total."""
    lines = [
        _grant_line(schema.activity(grant.activity), grant.minutes, grant.xp)
        for grant in result.grants
    ]
    p = result.progress
    return (
        "Logged!\n"
        + "\n".join(lines)
        + f"\n\n**Total Level {p.level}** ({p.current_xp}/{p.next_level_xp} XP to next level)"
    )


def _stat_line(line: StatLine) -> str:
    p = line.progress
    if line.depth:
        return f"  ↳ {_stat_label(line.name)} - Level {p.level} ({p.current_xp}/{p.next_level_xp})"
    return f"**{_stat_label(line.name)}** - Level {p.level} ({p.current_xp}/{p.next_level_xp})"


def render_stats(snapshot: StatsSnapshot) -> str:
    """Retourne la réponse de /stats : niveau total puis chaque stat (sous-stats indentées)."""
    blocks: list[str] = []
    for line in snapshot.lines:
        if line.depth and blocks:
            blocks[-1] = f"{blocks[-1]}\n{_stat_line(line)}"
        else:
            blocks.append(_stat_line(line))
    return (
        f"**{snapshot.username}'s Stats**\n\n"
        + _total_line(snapshot.total.progress)
        + "\n\n"
        + "\n\n".join(blocks)
    )


def render_voice_announcement(username: str, minutes: int, channel_name: str, progress: LevelProgress) -> str:
    """Retourne l'annonce postée après une session vocale créditée."""
    return (
        f"**{username}** earned **{minutes} Work XP** from {channel_name}!\n"
        f"Total Level {progress.level} ({progress.current_xp}/{progress.next_level_xp} XP)"
    )


def progress_error_message(e: AppError) -> str:
    """Retourne un message "membre-friendly" à partir d'une exception de progression."""
    match e:
        case exc.NoActivitySpecified():
            return "Please specify at least one activity with minutes!"

        case exc.InvalidMinutes(activity=activity):
            return f"Minutes for {activity} must be a positive number."

        case exc.UnknownActivity(activity=activity):
            return f"{activity} is not tracked on this server."

        case exc.StoreUnavailable():
            return "Database error, try again later."

        case _:
            return "Something went wrong, try again later."
