#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the bannerdb project.

Defaults are relative to the working directory the tool runs from:
    ./
    ├── config/        # YAML configuration files
    └── data/          # Local SQLite databases

Logs are written only when a log directory is configured. Every default
can be overridden from the command line or the config file.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


# --- Configuration ---
CONFIG_ENV_VAR = "BANNERDB_CONFIG"
PASSWORD_ENV_VAR = "DB_PASSWORD"

# --- Database ---
DB_PATH = Path("data") / "banner.db"
DEFAULT_DB_URL = f"sqlite:///{DB_PATH.as_posix()}"
