# cefr_chat/config.py
import os
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

# Completion request (fixed)
CHAT_MODEL = "gpt-4o-mini"
MAX_TOKENS = 800
TEMPERATURE = 0.6

# Variant cookie
VERSION_COOKIE = "cefr_version"
VERSION_COOKIE_MAX_AGE = 3600  # seconds

# CORS
ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",")
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
