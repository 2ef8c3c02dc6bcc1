"""
Process entry point: builds the store, Gemini client, bot and HTTP app, and
hands the bot lifecycle to the FastAPI startup/shutdown events.

Run with `python app.py` or `uvicorn app:create_application --factory`.
"""
import uvicorn
from fastapi import FastAPI

from imagebot import config
from imagebot.api import create_app
from imagebot.bot import TelegramBotService
from imagebot.cleanup import CleanupRegistry
from imagebot.gemini import GeminiImageClient
from imagebot.handlers import ImageRequestHandler
from imagebot.logger import logger
from imagebot.storage import build_storage


def create_application() -> FastAPI:
    storage = build_storage(config.DATABASE_URL)
    cleanup = CleanupRegistry()
    handler = ImageRequestHandler(
        storage=storage,
        image_client=GeminiImageClient(),
        cleanup=cleanup,
        temp_dir=config.TEMP_DIR,
        cleanup_delay=config.CLEANUP_DELAY_SECONDS,
    )
    bot_service = TelegramBotService(config.TELEGRAM_BOT_TOKEN, handler, cleanup)
    logger.info(f"Starting image generator bot (environment: {config.ENVIRONMENT})")
    return create_app(storage, bot_service)


if __name__ == "__main__":
    uvicorn.run(create_application(), host=config.HOST, port=config.PORT)
