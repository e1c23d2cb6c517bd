from __future__ import annotations

from types import SimpleNamespace

import pytest

from habitquest.app.services import Services
from habitquest.db import connection
from habitquest.db.schema import init_db
from habitquest.features.progress.catalog import CLASSIC, TIERED
from habitquest.features.progress.handler import ProgressCommandHandler
from habitquest.features.progress.ledger import UserLedger
from habitquest.features.progress.progress_service import ProgressService
from habitquest.features.progress.voice_sessions import VoiceSessionTracker
from tests._fakes._store_fakes import MemoryLedgerStore


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Base SQLite temporaire, tables créées."""
    path = tmp_path / "habitquest.db"
    monkeypatch.setattr(connection, "DB_PATH", str(path))
    init_db()
    return path


@pytest.fixture
def store():
    return MemoryLedgerStore()


@pytest.fixture
def fixed_clock():
    return lambda: 1_700_000_000


@pytest.fixture
def ledger(store, fixed_clock):
    return UserLedger(store, CLASSIC, clock=fixed_clock)


@pytest.fixture
def tiered_ledger(store, fixed_clock):
    return UserLedger(store, TIERED, clock=fixed_clock)


class ManualClock:
    """Horloge en millisecondes avancée à la main."""

    def __init__(self, start_ms: int = 0):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, *, seconds: float = 0, minutes: float = 0) -> None:
        self.now += int(seconds * 1000 + minutes * 60_000)


@pytest.fixture
def ms_clock():
    return ManualClock()


@pytest.fixture
def progress_service(ledger, ms_clock):
    return ProgressService(
        ledger=ledger,
        handler=ProgressCommandHandler(ledger),
        voice=VoiceSessionTracker(ledger, [100, 101], clock=ms_clock),
        announcement_channel_id=50,
    )


@pytest.fixture
def fake_bot(progress_service):
    return SimpleNamespace(services=Services(progress=progress_service))
