# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "SALES_TRACKER_APP_NAME": "App display name (default: sales-tracker).",
    "SALES_TRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Base task source
    "SALES_TRACKER_TASKS_URL": "URL of the base tasks JSON array (default: http://localhost:8000/tasks.json).",
    "SALES_TRACKER_FETCH_TIMEOUT_SECONDS": "HTTP timeout for the initial fetch (default: 10).",
    # Seed data
    "SALES_TRACKER_SEED_COUNT": "Sample tasks generated when the source is empty (default: 50).",
    "SALES_TRACKER_SEED": "Optional integer RNG seed for reproducible sample tasks.",
    # Paths (gitignored)
    "SALES_TRACKER_DATA_DIR": "Local data directory (default: .local/sales_tracker).",
    "SALES_TRACKER_USER_TASKS_DB_PATH": (
        "SQLite file holding user-created tasks (default: <data_dir>/user_tasks.sqlite3)."
    ),
    "SALES_TRACKER_USER_TASKS_KEY": "Key the user tasks are stored under (default: user_tasks).",
}
