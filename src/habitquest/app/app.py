import logging
import time

import discord

from habitquest import config
from habitquest.app.bot import HabitBot
from habitquest.app.startup import build_progress_service, build_store, init_services, load_extensions, step

log = logging.getLogger(__name__)


def create_bot() -> HabitBot:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.members = True
    intents.voice_states = True

    bot = HabitBot(intents=intents)

    store = step(
        f"Initialisation du stockage {config.STORAGE_BACKEND}",
        lambda: build_store(
            config.STORAGE_BACKEND,
            db_path=config.DB_PATH,
            json_path=config.JSON_PATH,
            supabase_url=config.SUPABASE_URL,
            supabase_key=config.SUPABASE_KEY,
        ),
    )
    progress = step(
        f"Initialisation de la progression ({config.STAT_SCHEMA})",
        lambda: build_progress_service(
            store,
            schema_name=config.STAT_SCHEMA,
            tracked_channel_ids=config.TRACKED_VOICE_CHANNEL_IDS,
            announcement_channel_id=config.XP_ANNOUNCEMENT_CHANNEL_ID,
        ),
    )
    step("Initialisation des services", lambda: init_services(bot, progress))
    step("Initialisation des extensions", lambda: load_extensions(bot))
    return bot


def main(started_at: float) -> None:
    bot = create_bot()
    bot.set_started_at(started_at)
    log.info("⏳ Connexion à Discord…")
    bot.set_discord_started_at(time.perf_counter())
    bot.run(config.TOKEN)
