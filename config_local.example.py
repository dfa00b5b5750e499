# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for secrets. This file should contain only safe overrides.
"""

# Example: run headless (reminders only, no REPL)
# CONSOLE_ENABLED = False

# Example: no OS toasts (e.g. on a machine without a notification daemon)
# NOTIFY_ENABLED = False

# Example: change model order
# LLM_MODELS = [
#     "llama-3.1-8b-instant",
#     "openai/gpt-oss-20b",
# ]
