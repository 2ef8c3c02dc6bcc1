"""
Telegram update handlers for the image generation flow.

Every free-text message runs through: validate -> create record -> notify ->
generate -> deliver. Any failure after validation marks the record failed and
answers with a generic message; internal error text never reaches the user.
"""

from pathlib import Path
from typing import Optional, Union

from telegram import Update
from telegram.constants import ChatAction
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from . import status_messages
from .cleanup import CleanupRegistry, remove_file
from .config import CLEANUP_DELAY_SECONDS, TEMP_DIR
from .errors import DeliveryError, ValidationError, error_detail
from .gemini import GeminiImageClient
from .logger import logger
from .schemas import GenerationStatus, GenerationUpdate, utc_now
from .storage import GenerationStore
from .validation import validate_prompt


class ImageRequestHandler:
    def __init__(
        self,
        storage: GenerationStore,
        image_client: GeminiImageClient,
        cleanup: CleanupRegistry,
        temp_dir: Union[str, Path] = TEMP_DIR,
        cleanup_delay: float = CLEANUP_DELAY_SECONDS,
    ):
        self.storage = storage
        self.image_client = image_client
        self.cleanup = cleanup
        self.temp_dir = Path(temp_dir)
        self.cleanup_delay = cleanup_delay

    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.effective_message.reply_text(status_messages.WELCOME_MESSAGE)

    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.effective_message.reply_text(status_messages.HELP_MESSAGE)

    async def handle_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        prompt = message.text if message else None

        # Commands are answered by their own handlers or ignored
        if not prompt or prompt.startswith("/") or update.effective_user is None:
            return

        requester_id = str(update.effective_user.id)

        try:
            validate_prompt(prompt)
        except ValidationError as e:
            logger.info(f"Rejected prompt from user {requester_id}: {e.reason}")
            await message.reply_text(status_messages.get_rejection_message(e.reason))
            return

        await context.bot.send_chat_action(chat_id=message.chat_id, action=ChatAction.TYPING)

        image_path: Optional[Path] = None
        try:
            generation = await self.storage.create_record(requester_id, prompt)
            logger.info(f"Generation {generation.id} created for user {requester_id}")

            generating_message = await message.reply_text(status_messages.get_generating_message(prompt))

            self.temp_dir.mkdir(parents=True, exist_ok=True)
            image_path = self.temp_dir / f"{generation.id}.png"

            await self.image_client.generate(prompt, image_path)

            if not image_path.exists():
                raise DeliveryError("Image generation failed - no file created")

            await message.reply_photo(photo=image_path, caption=status_messages.get_success_caption(prompt))

            await self.storage.update_record(
                generation.id,
                GenerationUpdate(
                    status=GenerationStatus.COMPLETED,
                    image_location=str(image_path),
                    completed_at=utc_now(),
                ),
            )
            logger.info(f"Generation {generation.id} completed")

            # Give Telegram time to finish the upload before the file goes away
            self.cleanup.schedule(image_path, self.cleanup_delay)
            image_path = None

            try:
                await context.bot.delete_message(chat_id=message.chat_id, message_id=generating_message.message_id)
            except TelegramError as e:
                logger.debug(f"Could not delete generating message: {e}")

        except Exception as e:
            logger.error(f"Image generation error for user {requester_id}: {e}")
            try:
                await message.reply_text(status_messages.GENERATION_FAILED_MESSAGE)
            finally:
                if image_path is not None:
                    remove_file(image_path)
                await self._record_failure(requester_id, prompt, e)

    async def _record_failure(self, requester_id: str, prompt: str, error: Exception) -> None:
        # The record id is not threaded through here; the latest record for the
        # same requester and prompt is assumed to be the one that failed.
        try:
            generation = await self.storage.find_latest_by_requester_and_prompt(requester_id, prompt)
            if generation:
                await self.storage.update_record(
                    generation.id,
                    GenerationUpdate(
                        status=GenerationStatus.FAILED,
                        error_detail=error_detail(error),
                        completed_at=utc_now(),
                    ),
                )
                logger.info(f"Generation {generation.id} marked as failed")
        except Exception as storage_error:
            logger.error(f"Storage error while recording failure: {storage_error}")

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Last-resort handler for errors raised anywhere in update processing"""
        logger.error(f"Telegram bot error: {context.error}", exc_info=context.error)

        message = getattr(update, "effective_message", None)
        if message is not None:
            try:
                await message.reply_text(status_messages.UNEXPECTED_ERROR_MESSAGE)
            except TelegramError as e:
                logger.error(f"Failed to send error reply: {e}")
