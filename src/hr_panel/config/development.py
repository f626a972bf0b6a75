import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Text-generation collaborator; empty key means the AI features answer with fallbacks.
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))

COMPANY_NAME = os.getenv("COMPANY_NAME", "Teleexpro")

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "1")))
