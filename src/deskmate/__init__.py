"""deskmate: desktop assistant with LLM command routing and time-of-day reminders."""

__version__ = "0.1.0"
