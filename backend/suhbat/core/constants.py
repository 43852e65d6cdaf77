"""
Core Application Constants
Defines interview configuration and system-wide constants.
"""

# Interview Configuration
MAX_QUESTIONS = 6  # Answers collected before the interview is evaluated
RECENT_HISTORY_TURNS = 4  # Turns of context sent with each follow-up question

# Stage boundaries (inclusive upper question numbers)
BACKGROUND_STAGE_LAST_QUESTION = 2
TECHNICAL_STAGE_LAST_QUESTION = 4

# Service identity reported by /health
SERVICE_MESSAGE = "SuhbatAI Backend - AI-Driven"
API_PROVIDER = "Google Gemini"
API_VERSION = "1.0.0"
