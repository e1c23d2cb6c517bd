"""Valeurs par défaut centralisées.

Objectif : ne pas dupliquer les mêmes constantes (courbe de niveaux, pseudo, vocal)
dans plusieurs fichiers. Le reste du code doit importer depuis ici.
"""

from __future__ import annotations

from typing import Final

# -------------------- Courbe de niveaux --------------------

# Premier niveau affiché. Les variantes historiques du bot n'étaient pas
# d'accord (0 ou 1) ; on fixe 1 : 0 XP => "Level 1".
LEVEL_BASE: Final[int] = 1

# Passer le k-ième niveau coûte k * LEVEL_STEP_XP (100, 200, 300, ...).
LEVEL_STEP_XP: Final[int] = 100


# -------------------- Pseudo --------------------

NICKNAME_MAX_LENGTH: Final[int] = 32


# -------------------- Vocal --------------------

# Stat créditée à la sortie d'un salon vocal suivi.
VOICE_STAT: Final[str] = "work"

# Nom d'activité inscrit dans le journal pour les crédits vocaux.
VOICE_LOG_ACTIVITY: Final[str] = "work_voice"


# -------------------- Configuration --------------------

STAT_SCHEMA_DEFAULT: Final[str] = "classic"
STORAGE_BACKEND_DEFAULT: Final[str] = "sqlite"
DB_PATH_DEFAULT: Final[str] = "./data/habitquest.db"
JSON_PATH_DEFAULT: Final[str] = "./data/habitquest.json"
