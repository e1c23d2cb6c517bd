import pytest

from habitquest.db.repo import ledger_repo as mod

# ----------------------------
# Fakes
# ----------------------------

class FakeCursor:
    def __init__(self, *, one=None, all=None):
        self._one = one
        self._all = all

    def fetchone(self):
        return self._one

    def fetchall(self):
        return self._all


class FakeConn:
    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []
        self._queue: list[FakeCursor] = []

    def push(self, *, one=None, all=None):
        self._queue.append(FakeCursor(one=one, all=all))

    def execute(self, sql: str, params: tuple = ()):
        self.calls.append((" ".join(sql.split()), params))
        return self._queue.pop(0) if self._queue else FakeCursor(one=None, all=[])


class FakeConnCM:
    def __init__(self, conn: FakeConn):
        self.conn = conn

    def __enter__(self):
        return self.conn

    def __exit__(self, exc_type, exc, tb):
        return False


@pytest.fixture
def fconn(monkeypatch):
    conn = FakeConn()
    monkeypatch.setattr(mod, "get_conn", lambda: FakeConnCM(conn), raising=True)
    return conn


# ----------------------------
# SQL émis
# ----------------------------

def test_get_or_create_inserts_or_ignores(fconn: FakeConn):
    fconn.push()  # INSERT
    fconn.push(one=("alice",))
    fconn.push(all=[("soma", 10), ("work", 3)])

    name, counters = mod.ledger_get_or_create(1, 10, username="alice", created_at=123)

    assert name == "alice"
    assert counters == {"soma": 10, "work": 3}
    sql, params = fconn.calls[0]
    assert sql.startswith("INSERT OR IGNORE INTO progress_members")
    assert params == (1, 10, "alice", 123)


def test_accumulate_uses_native_upsert(fconn: FakeConn):
    fconn.push()
    fconn.push()
    fconn.push(one=(42,))

    assert mod.ledger_accumulate(1, 10, "soma", 7) == 42

    upsert_sql, params = fconn.calls[1]
    assert "ON CONFLICT(guild_id, user_id, counter) DO UPDATE SET xp = xp + excluded.xp" in upsert_sql
    assert params == (1, 10, "soma", 7)


def test_append_log_params(fconn: FakeConn):
    mod.ledger_append_log(1, 10, "video", 10, 7, 999)
    sql, params = fconn.calls[0]
    assert sql.startswith("INSERT INTO activity_logs")
    assert params == (1, 10, "video", 10, 7, 999)


# ----------------------------
# SQLite réel
# ----------------------------

def test_round_trip_on_real_database(sqlite_db):
    name, counters = mod.ledger_get_or_create(1, 10, username="alice", created_at=5)
    assert (name, counters) == ("alice", {})

    assert mod.ledger_accumulate(1, 10, "soma", 30) == 30
    assert mod.ledger_accumulate(1, 10, "soma", 12) == 42
    assert mod.ledger_accumulate(1, 10, "work", 0) == 0

    assert mod.ledger_read_counters(1, 10) == {"soma": 42, "work": 0}
    assert mod.ledger_read_counters(1, 11) == {}

    # second appel : pas de réinitialisation, nom d'origine conservé
    name, counters = mod.ledger_get_or_create(1, 10, username="renamed", created_at=6)
    assert (name, counters) == ("alice", {"soma": 42, "work": 0})


def test_accumulate_creates_member_row(sqlite_db):
    mod.ledger_accumulate(2, 20, "knowledge", 5)
    name, counters = mod.ledger_get_or_create(2, 20, username="late")
    assert name is None
    assert counters == {"knowledge": 5}
