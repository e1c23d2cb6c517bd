import pytest

from habitquest.features.progress.levels import (
    LevelProgress,
    compute_level_progress,
    cumulative_xp,
    xp_for_level,
)


@pytest.mark.parametrize(
    "xp, expected",
    [
        (0, LevelProgress(level=1, current_xp=0, next_level_xp=100)),
        (99, LevelProgress(level=1, current_xp=99, next_level_xp=100)),
        (100, LevelProgress(level=2, current_xp=0, next_level_xp=200)),
        (250, LevelProgress(level=3, current_xp=50, next_level_xp=300)),
        (300, LevelProgress(level=3, current_xp=0, next_level_xp=300)),
        (600, LevelProgress(level=4, current_xp=0, next_level_xp=400)),
    ],
)
def test_compute_level_progress_thresholds(xp, expected):
    assert compute_level_progress(xp) == expected


def test_compute_level_progress_custom_base_level():
    assert compute_level_progress(250, base_level=0) == LevelProgress(level=2, current_xp=50, next_level_xp=300)


def test_compute_level_progress_truncates_fractional_current_xp():
    res = compute_level_progress(150.9)
    assert res == LevelProgress(level=2, current_xp=50, next_level_xp=200)


def test_compute_level_progress_rejects_negative_xp():
    with pytest.raises(ValueError):
        compute_level_progress(-1)


def test_round_trip_reconstructs_total_xp():
    for xp in range(0, 5_000, 7):
        progress = compute_level_progress(xp)
        assert progress.current_xp < progress.next_level_xp
        assert cumulative_xp(progress) == xp


def test_xp_for_level_values():
    assert xp_for_level(1) == 0
    assert xp_for_level(2) == 100
    assert xp_for_level(3) == 300
    assert xp_for_level(4) == 600
    assert xp_for_level(0, base_level=0) == 0


def test_xp_for_level_below_base_raises():
    with pytest.raises(ValueError):
        xp_for_level(0)
