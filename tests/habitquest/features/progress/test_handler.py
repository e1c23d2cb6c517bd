import pytest

from habitquest.exceptions.progress import InvalidMinutes, NoActivitySpecified, StoreUnavailable, UnknownActivity
from habitquest.features.progress.handler import ProgressCommandHandler, StatLine
from habitquest.features.progress.levels import LevelProgress


@pytest.fixture
def handler(ledger):
    return ProgressCommandHandler(ledger)


@pytest.fixture
def tiered_handler(tiered_ledger):
    return ProgressCommandHandler(tiered_ledger)


def test_log_credits_each_activity_in_catalog_order(handler, store):
    result = handler.log_activities(1, 10, "alice", {"writing": 10, "workout": 30, "video": 10})

    assert [g.activity for g in result.grants] == ["workout", "video", "writing"]
    assert [g.xp for g in result.grants] == [30, 7, 12]
    assert result.total_xp == 49
    assert result.progress == LevelProgress(level=1, current_xp=49, next_level_xp=100)
    assert store.calls[0] == ("get_or_create", 1, 10, "alice")
    assert len(store.logs) == 3


def test_log_ignores_absent_and_zero_fields(handler, store):
    result = handler.log_activities(1, 10, "alice", {"workout": 15, "video": None, "reading": 0, "agility": None})

    assert [g.activity for g in result.grants] == ["workout"]
    assert len(store.logs) == 1


def test_log_without_positive_field_fails_before_any_store_call(handler, store):
    with pytest.raises(NoActivitySpecified):
        handler.log_activities(1, 10, "alice", {"workout": None, "video": 0})
    assert store.calls == []


def test_log_rejects_negative_minutes(handler, store):
    with pytest.raises(InvalidMinutes) as excinfo:
        handler.log_activities(1, 10, "alice", {"workout": 10, "reading": -5})
    assert excinfo.value.activity == "reading"
    assert store.calls == []


def test_log_rejects_activity_outside_schema(handler, store):
    with pytest.raises(UnknownActivity):
        handler.log_activities(1, 10, "alice", {"agility": 10})
    assert store.calls == []


def test_log_partial_application_on_mid_operation_failure(handler, store):
    # premier crédit OK, le second échoue
    store.fail_after["accumulate"] = 1

    with pytest.raises(StoreUnavailable):
        handler.log_activities(1, 10, "alice", {"workout": 10, "reading": 10})

    counters = store.members[(1, 10)]["counters"]
    assert counters == {"soma": 10}


def test_log_returns_new_total_after_previous_logs(handler):
    handler.log_activities(1, 10, "alice", {"workout": 90})
    result = handler.log_activities(1, 10, "alice", {"reading": 60})
    assert result.total_xp == 150
    assert result.progress == LevelProgress(level=2, current_xp=50, next_level_xp=200)


def test_stats_is_read_only(handler, store):
    snapshot = handler.stats(1, 10, "alice")

    assert snapshot.total == StatLine(name="total", xp=0, progress=LevelProgress(1, 0, 100))
    assert [line.name for line in snapshot.lines] == ["soma", "knowledge", "perception", "work"]
    assert store.write_calls() == []
    assert store.members == {}


def test_stats_breakdown_with_sub_stats(tiered_handler):
    tiered_handler.log_activities(1, 10, "bob", {"agility": 30, "strength": 90, "meditation": 250})

    snapshot = tiered_handler.stats(1, 10, "bob")

    assert snapshot.username == "bob"
    assert snapshot.total.xp == 370
    assert [(line.name, line.xp, line.depth) for line in snapshot.lines] == [
        ("soma", 120, 0),
        ("agility", 30, 1),
        ("strength", 90, 1),
        ("knowledge", 0, 0),
        ("perception", 250, 0),
        ("work", 0, 0),
    ]
    assert snapshot.lines[0].progress == LevelProgress(level=2, current_xp=20, next_level_xp=200)
