# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a
local .env file) by `nexttask.config.Settings.from_env()`.

This file exists to make the repo self-documenting even without opening README.md.
"""

ENV_VARS = {
    # Logging
    "NEXTTASK_LOG_LEVEL": "Console log level (default: WARNING). Unknown names fall back to WARNING.",
    # Paths
    "NEXTTASK_DATA_DIR": "Data directory for the database and nexttask.log (default: ~/.local/share/nexttask).",
    "NEXTTASK_DB_PATH": "SQLite file (default: <data_dir>/tasks.sqlite3).",
    # Limits
    "NEXTTASK_LIST_LIMIT": "Max rows shown by any listing (default: 10000). Classification is never capped.",
    "NEXTTASK_MAX_TREE_DEPTH": "Depth at which `tree` stops descending (default: 100).",
    # Output
    "NEXTTASK_TABLE_FORMAT": "tabulate table format for listings (default: simple).",
}
