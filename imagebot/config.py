"""
Runtime configuration read from environment variables
"""
import os

ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

# Secrets (validated by the components that need them)
TELEGRAM_BOT_TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN", "")
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")

# Only this Gemini model family returns inline images
GEMINI_IMAGE_MODEL = os.environ.get("GEMINI_IMAGE_MODEL", "gemini-2.0-flash-preview-image-generation")

# Prompt limits
MIN_PROMPT_LENGTH = int(os.environ.get("MIN_PROMPT_LENGTH", "3"))
MAX_PROMPT_LENGTH = int(os.environ.get("MAX_PROMPT_LENGTH", "500"))

# Transient image files
TEMP_DIR = os.environ.get("TEMP_DIR", os.path.join(os.getcwd(), "temp"))
CLEANUP_DELAY_SECONDS = float(os.environ.get("CLEANUP_DELAY_SECONDS", "30"))

# Storage backend; in-memory when unset
DATABASE_URL = os.environ.get("DATABASE_URL")

# HTTP surface
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "5000"))
STATIC_DIR = os.environ.get("STATIC_DIR", os.path.join("dist", "public"))
RECENT_GENERATIONS_LIMIT = int(os.environ.get("RECENT_GENERATIONS_LIMIT", "10"))
RATE_LIMIT_API_PER_MINUTE = os.environ.get("RATE_LIMIT_API_PER_MINUTE", "60")

TEAM_NAME = os.environ.get("TEAM_NAME", "The Firm AI Team")
