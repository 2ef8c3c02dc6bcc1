"""
Telegram bot connection lifecycle
"""
from telegram import Update
from telegram.ext import Application, ApplicationBuilder, CommandHandler, MessageHandler, filters

from .cleanup import CleanupRegistry
from .handlers import ImageRequestHandler
from .logger import logger


class TelegramBotService:
    def __init__(self, token: str, handler: ImageRequestHandler, cleanup: CleanupRegistry):
        if not token:
            raise ValueError("TELEGRAM_BOT_TOKEN not provided or set in environment")
        self.handler = handler
        self.cleanup = cleanup
        self.application: Application = ApplicationBuilder().token(token).build()
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        self.application.add_handler(CommandHandler("start", self.handler.start_command))
        self.application.add_handler(CommandHandler("help", self.handler.help_command))
        # Unknown commands reach the text handler, which ignores them
        self.application.add_handler(
            MessageHandler(filters.TEXT & ~filters.UpdateType.EDITED, self.handler.handle_text)
        )
        self.application.add_error_handler(self.handler.error_handler)

    async def launch(self) -> None:
        """Start long polling on the running event loop"""
        await self.application.initialize()
        await self.application.start()
        await self.application.updater.start_polling(allowed_updates=Update.ALL_TYPES)
        logger.info("Telegram bot launched successfully (using polling)")

    async def stop(self) -> None:
        try:
            if self.application.updater and self.application.updater.running:
                await self.application.updater.stop()
            if self.application.running:
                await self.application.stop()
            await self.application.shutdown()
            logger.info("Telegram bot stopped")
        finally:
            await self.cleanup.cancel_all()

    async def get_me(self):
        """Ask Telegram for the bot's own identity"""
        return await self.application.bot.get_me()
