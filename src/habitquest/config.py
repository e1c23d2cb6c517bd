"""Module de configuration de HabitQuest, chargé de lire les variables d'environnement nécessaires au fonctionnement du bot.

Comme le token Discord, le backend de stockage, le schéma de stats et les salons vocaux suivis.
"""

import os
from typing import Final

from dotenv import load_dotenv

from habitquest.defaults import (
    DB_PATH_DEFAULT,
    JSON_PATH_DEFAULT,
    STAT_SCHEMA_DEFAULT,
    STORAGE_BACKEND_DEFAULT,
)
from habitquest.exceptions.config import IncompleteFeatureConfig, InvalidEnvVar, MissingEnvVar

STORAGE_BACKENDS: Final[tuple[str, ...]] = ("sqlite", "json", "rest")
STAT_SCHEMAS: Final[tuple[str, ...]] = ("classic", "tiered", "flat")


def env_str_required(name: str) -> str:
    """Récupère une variable d'environnement obligatoire et lève une exception si elle n'est pas définie."""
    value = os.getenv(name)
    if not value:
        raise MissingEnvVar(name)
    return value


def env_int_optional(name: str) -> int | None:
    """Récupère une variable d'environnement optionnelle convertie en int, None si elle n'est pas définie."""
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise InvalidEnvVar(name, "entier") from e


def env_str_optional(name: str) -> str | None:
    """Récupère une variable d'environnement optionnelle et retourne None si elle n'est pas définie ou est vide."""
    value = os.getenv(name)
    return value if value else None


def env_int_list(name: str) -> tuple[int, ...]:
    """Récupère une liste d'entiers séparés par des virgules (vide si la variable n'est pas définie)."""
    value = os.getenv(name)
    if not value:
        return ()
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError as e:
        raise InvalidEnvVar(name, "entiers séparés par des virgules") from e


def env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    """Récupère une variable d'environnement parmi `choices` (insensible à la casse)."""
    value = (os.getenv(name) or default).strip().lower()
    if value not in choices:
        raise InvalidEnvVar(name, " | ".join(choices))
    return value


load_dotenv()

# === Discord (required) ===
TOKEN: Final[str] = env_str_required("DISCORD_TOKEN")

# === Stockage ===
STORAGE_BACKEND: Final[str] = env_choice("STORAGE_BACKEND", STORAGE_BACKENDS, STORAGE_BACKEND_DEFAULT)
DB_PATH: Final[str] = env_str_optional("DB_PATH") or DB_PATH_DEFAULT
JSON_PATH: Final[str] = env_str_optional("JSON_PATH") or JSON_PATH_DEFAULT
SUPABASE_URL: Final[str | None] = env_str_optional("SUPABASE_URL")
SUPABASE_KEY: Final[str | None] = env_str_optional("SUPABASE_KEY")

if STORAGE_BACKEND == "rest":
    missing = [name for name, v in [
        ("SUPABASE_URL", SUPABASE_URL),
        ("SUPABASE_KEY", SUPABASE_KEY),
    ] if v is None]
    if missing:
        raise IncompleteFeatureConfig("le stockage REST", missing)

# === Progression ===
STAT_SCHEMA: Final[str] = env_choice("STAT_SCHEMA", STAT_SCHEMAS, STAT_SCHEMA_DEFAULT)
TRACKED_VOICE_CHANNEL_IDS: Final[tuple[int, ...]] = env_int_list("TRACKED_VOICE_CHANNEL_IDS")
XP_ANNOUNCEMENT_CHANNEL_ID: Final[int | None] = env_int_optional("XP_ANNOUNCEMENT_CHANNEL_ID")

# === Logs ===
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL") or "INFO"
