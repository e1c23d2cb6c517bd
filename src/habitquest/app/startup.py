import logging
import time
from collections.abc import Callable, Iterable
from typing import Any

from habitquest.app.extensions import EXTENSIONS
from habitquest.app.services import Services
from habitquest.db import connection
from habitquest.db.schema import init_db
from habitquest.db.stores.base import LedgerStore
from habitquest.db.stores.json_store import JsonLedgerStore
from habitquest.db.stores.rest_store import RestLedgerStore
from habitquest.db.stores.sqlite_store import SqliteLedgerStore
from habitquest.exceptions.config import IncompleteFeatureConfig, InvalidEnvVar
from habitquest.features.progress.catalog import get_schema
from habitquest.features.progress.handler import ProgressCommandHandler
from habitquest.features.progress.ledger import UserLedger
from habitquest.features.progress.progress_service import ProgressService
from habitquest.features.progress.voice_sessions import VoiceSessionTracker

log = logging.getLogger(__name__)


def step(name: str, fn: Callable[[], Any], *, critical: bool = True, logger: logging.Logger | None = None) -> Any:
    start = time.perf_counter()
    if logger is None:
        logger = log
    try:
        result = fn()
    except Exception:
        ms = (time.perf_counter() - start) * 1000
        logger.exception("❌ %-50s %8.1f ms", name, ms)
        if critical:
            raise
        return None
    ms = (time.perf_counter() - start) * 1000
    label = f"{name} ({result})" if isinstance(result, (int, str)) else name
    logger.info("✅ %-53s %8.1f ms", label, ms)
    return result


def build_store(
    backend: str,
    *,
    db_path: str | None = None,
    json_path: str | None = None,
    supabase_url: str | None = None,
    supabase_key: str | None = None,
) -> LedgerStore:
    """Instancie le backend de stockage demandé (et crée les tables SQLite si besoin)."""
    match backend:
        case "sqlite":
            if db_path:
                connection.set_db_path(db_path)
            init_db()
            return SqliteLedgerStore()
        case "json":
            if not json_path:
                raise IncompleteFeatureConfig("le stockage JSON", ["JSON_PATH"])
            return JsonLedgerStore(json_path)
        case "rest":
            if not supabase_url or not supabase_key:
                missing = [name for name, v in [("SUPABASE_URL", supabase_url), ("SUPABASE_KEY", supabase_key)] if not v]
                raise IncompleteFeatureConfig("le stockage REST", missing)
            return RestLedgerStore(supabase_url, supabase_key)
        case _:
            raise InvalidEnvVar("STORAGE_BACKEND", "sqlite | json | rest")


def build_progress_service(
    store: LedgerStore,
    *,
    schema_name: str,
    tracked_channel_ids: Iterable[int] = (),
    announcement_channel_id: int | None = None,
) -> ProgressService:
    """Assemble stockage -> registre -> suivi vocal / commandes."""
    ledger = UserLedger(store, get_schema(schema_name))
    return ProgressService(
        ledger=ledger,
        handler=ProgressCommandHandler(ledger),
        voice=VoiceSessionTracker(ledger, tracked_channel_ids),
        announcement_channel_id=announcement_channel_id,
    )


def init_services(bot: Any, progress: ProgressService) -> str:
    bot.services = Services(progress=progress)
    return progress.backend


def load_extensions(bot: Any) -> int:
    count = 0
    for ext in EXTENSIONS:
        bot.load_extension(ext)
        count += 1
    return count
