"""Module de gestion de la connexion à la base de données SQLite."""

import os
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from habitquest.defaults import DB_PATH_DEFAULT

DB_PATH = DB_PATH_DEFAULT
_DB_LOCK = threading.RLock()


def set_db_path(path: str) -> None:
    """Change le fichier SQLite utilisé par toutes les connexions suivantes."""
    global DB_PATH
    DB_PATH = path


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    """Context manager pour obtenir une connexion à la base de données SQLite.

    Assure que les connexions sont thread-safe en utilisant un verrou,
    et commit à la sortie du bloc si aucune exception n'a été levée.
    """
    with _DB_LOCK:
        directory = os.path.dirname(DB_PATH)
        if directory:
            os.makedirs(directory, exist_ok=True)
        conn = sqlite3.connect(DB_PATH)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()
