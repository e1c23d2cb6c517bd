from .connection import get_conn


def init_db():
    """Crée les tables de progression si elles n'existent pas encore."""
    with get_conn() as conn:
        conn.executescript("""
        -- -------------------- Progression --------------------
        -- Un membre par (serveur, utilisateur), créé au premier contact.
        CREATE TABLE IF NOT EXISTS progress_members (
			guild_id    INTEGER NOT NULL,
			user_id     INTEGER NOT NULL,
			username    TEXT,
			created_at  INTEGER NOT NULL DEFAULT 0,
			PRIMARY KEY (guild_id, user_id)
        );

        -- Un compteur d'XP par (serveur, utilisateur, stat ou activité).
        -- Une stat ajoutée plus tard n'a pas besoin de migration : ligne absente = 0.
        CREATE TABLE IF NOT EXISTS progress_counters (
			guild_id    INTEGER NOT NULL,
			user_id     INTEGER NOT NULL,
			counter     TEXT    NOT NULL,
			xp          INTEGER NOT NULL DEFAULT 0 CHECK(xp >= 0),
			PRIMARY KEY (guild_id, user_id, counter)
        );

        -- Journal append-only des activités déclarées (informatif).
        CREATE TABLE IF NOT EXISTS activity_logs (
			id          INTEGER PRIMARY KEY AUTOINCREMENT,
			guild_id    INTEGER NOT NULL,
			user_id     INTEGER NOT NULL,
			activity    TEXT    NOT NULL,
			minutes     INTEGER NOT NULL,
			xp_gained   INTEGER NOT NULL,
			logged_at   INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_activity_logs_member_time
			ON activity_logs(guild_id, user_id, logged_at);
        """)
