from habitquest.exceptions.base import AppError
from habitquest.exceptions.progress import (
    InvalidMinutes,
    NoActivitySpecified,
    StoreUnavailable,
    UnknownActivity,
)
from habitquest.features.progress.catalog import CLASSIC, TIERED
from habitquest.features.progress.handler import LogResult, StatLine, StatsSnapshot
from habitquest.features.progress.levels import LevelProgress
from habitquest.features.progress.models import ActivityGrant
from habitquest.ui.progress.messages import (
    progress_error_message,
    render_log_result,
    render_stats,
    render_voice_announcement,
)


def test_render_log_result():
    result = LogResult(
        grants=(
            ActivityGrant("workout", 30, 30, ("soma",)),
            ActivityGrant("video", 10, 7, ("knowledge",)),
            ActivityGrant("writing", 10, 12, ("knowledge",)),
            ActivityGrant("background_med", 4, 0, ("perception",)),
        ),
        total_xp=49,
        progress=LevelProgress(1, 49, 100),
    )

    assert render_log_result(result, CLASSIC) == (
        "Logged!\n"
        "Workout: 30 min → +30 XP (Soma)\n"
        "Video: 10 min x0.7 → +7 XP (Knowledge)\n"
        "Writing: 10 min x1.2 → +12 XP (Knowledge)\n"
        "Background Med: 4 min x0.2 → +0 XP (Perception)\n"
        "\n"
        "**Total Level 1** (49/100 XP to next level)"
    )


def test_render_log_result_sub_stat_label():
    result = LogResult(
        grants=(ActivityGrant("agility", 15, 15, ("agility", "soma")),),
        total_xp=15,
        progress=LevelProgress(1, 15, 100),
    )
    assert "Agility: 15 min → +15 XP (Agility)" in render_log_result(result, TIERED)


def test_render_stats():
    snapshot = StatsSnapshot(
        username="alice",
        total=StatLine("total", 250, LevelProgress(3, 50, 300)),
        lines=(
            StatLine("soma", 150, LevelProgress(2, 50, 200)),
            StatLine("agility", 150, LevelProgress(2, 50, 200), depth=1),
            StatLine("knowledge", 100, LevelProgress(2, 0, 200)),
        ),
    )

    assert render_stats(snapshot) == (
        "**alice's Stats**\n\n"
        "**Total Level 3** (50/300 XP)\n\n"
        "**Soma** - Level 2 (50/200)\n"
        "  ↳ Agility - Level 2 (50/200)\n\n"
        "**Knowledge** - Level 2 (0/200)"
    )


def test_render_voice_announcement():
    text = render_voice_announcement("alice", 45, "Focus Room", LevelProgress(2, 20, 200))
    assert text == "**alice** earned **45 Work XP** from Focus Room!\nTotal Level 2 (20/200 XP)"


def test_progress_error_message_mapping():
    assert progress_error_message(NoActivitySpecified()) == "Please specify at least one activity with minutes!"
    assert progress_error_message(StoreUnavailable("rest", "HTTP 500")) == "Database error, try again later."
    assert "reading" in progress_error_message(InvalidMinutes("reading", -3))
    assert "agility" in progress_error_message(UnknownActivity("agility"))
    assert progress_error_message(AppError("x")) == "Something went wrong, try again later."
