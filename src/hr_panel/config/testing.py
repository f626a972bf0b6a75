SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-2.5-flash"
AI_TIMEOUT_SECONDS = 1.0

COMPANY_NAME = "Teleexpro"

SEED_DEMO_DATA = False
