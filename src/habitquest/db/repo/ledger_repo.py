from ..connection import get_conn

# ------------ Progression -----------
def ledger_get_or_create(guild_id: int, user_id: int, *, username: str | None = None, created_at: int = 0) -> tuple[str | None, dict[str, int]]:
    """Crée le membre s'il n'existe pas (idempotent) et retourne (username, {compteur: xp})."""
    with get_conn() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO progress_members(guild_id, user_id, username, created_at) VALUES (?, ?, ?, ?)",
            (guild_id, user_id, username, int(created_at)),
        )
        row = conn.execute(
            "SELECT username FROM progress_members WHERE guild_id=? AND user_id=?",
            (guild_id, user_id),
        ).fetchone()
        rows = conn.execute(
            "SELECT counter, xp FROM progress_counters WHERE guild_id=? AND user_id=?",
            (guild_id, user_id),
        ).fetchall()
    stored_name = row[0] if row else None
    return stored_name, {str(c): int(x) for (c, x) in rows}


def ledger_accumulate(guild_id: int, user_id: int, counter: str, delta: int) -> int:
    """Ajoute delta au compteur (upsert atomique) et retourne la nouvelle valeur."""
    with get_conn() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO progress_members(guild_id, user_id) VALUES (?, ?)",
            (guild_id, user_id),
        )
        conn.execute(
            """
            INSERT INTO progress_counters(guild_id, user_id, counter, xp)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(guild_id, user_id, counter) DO UPDATE SET xp = xp + excluded.xp
            """,
            (guild_id, user_id, counter, int(delta)),
        )
        row = conn.execute(
            "SELECT xp FROM progress_counters WHERE guild_id=? AND user_id=? AND counter=?",
            (guild_id, user_id, counter),
        ).fetchone()
    return int(row[0]) if row else 0


def ledger_read_counters(guild_id: int, user_id: int) -> dict[str, int]:
    """Retourne {compteur: xp} sans rien créer ({} si le membre est inconnu)."""
    with get_conn() as conn:
        rows = conn.execute(
            "SELECT counter, xp FROM progress_counters WHERE guild_id=? AND user_id=?",
            (guild_id, user_id),
        ).fetchall()
    return {str(c): int(x) for (c, x) in rows}


def ledger_append_log(guild_id: int, user_id: int, activity: str, minutes: int, xp_gained: int, logged_at: int) -> None:
    """Ajoute une ligne au journal d'activité."""
    with get_conn() as conn:
        conn.execute(
            """
            INSERT INTO activity_logs(guild_id, user_id, activity, minutes, xp_gained, logged_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (guild_id, user_id, activity, int(minutes), int(xp_gained), int(logged_at)),
        )
