# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "DESKMATE_APP_NAME": "App display name, also the toast app name (default: deskmate).",
    "DESKMATE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "DESKMATE_CONSOLE_ENABLED": "Run the console REPL (true/false). When false, only reminders run.",
    # LLM (OpenAI-compatible endpoint)
    "DESKMATE_LLM_API_KEY": "API key for the LLM endpoint. GROQ_API_KEY is accepted as a fallback.",
    "DESKMATE_LLM_BASE_URL": "Endpoint base URL (default: https://api.groq.com/openai/v1).",
    "DESKMATE_LLM_MODELS": "Comma/space separated list of models to try in order (default: openai/gpt-oss-20b).",
    "DESKMATE_LLM_TEMPERATURE": "Sampling temperature for command parsing (default: 0.1).",
    "DESKMATE_LLM_FIRST_TOKEN_TIMEOUT_SECONDS": "Give up on a model with no first token after this long (default: 20).",
    "DESKMATE_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 25).",
    "DESKMATE_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    # Paths (gitignored)
    "DESKMATE_DATA_DIR": "Local data directory for the DB and log file (default: .local/deskmate).",
    "DESKMATE_TASKS_DB_PATH": "Reminder SQLite path (default: <data_dir>/tasks.sqlite3).",
    # OS notifications
    "DESKMATE_NOTIFY_ENABLED": "Show an OS toast when a reminder fires (true/false, default: true).",
    "DESKMATE_NOTIFY_TIMEOUT_SECONDS": "How long the toast stays visible (default: 10).",
    "DESKMATE_NOTIFY_TITLE": "Toast title (default: Desktop Agent Reminder).",
}
