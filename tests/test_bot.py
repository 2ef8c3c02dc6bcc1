"""Bot service wiring tests (no network access)."""

import asyncio

import pytest
from telegram.ext import CommandHandler, MessageHandler

from imagebot.bot import TelegramBotService
from imagebot.cleanup import CleanupRegistry
from imagebot.handlers import ImageRequestHandler
from imagebot.storage import MemStorage

TOKEN = "123456:TEST-TOKEN"


class NoopImageClient:
    async def generate(self, prompt, destination):
        return destination


def make_service(tmp_path):
    cleanup = CleanupRegistry()
    handler = ImageRequestHandler(MemStorage(), NoopImageClient(), cleanup, temp_dir=tmp_path)
    return TelegramBotService(TOKEN, handler, cleanup), handler


def test_missing_token_is_a_configuration_error(tmp_path):
    cleanup = CleanupRegistry()
    handler = ImageRequestHandler(MemStorage(), NoopImageClient(), cleanup, temp_dir=tmp_path)
    with pytest.raises(ValueError):
        TelegramBotService("", handler, cleanup)


def test_handlers_registered_in_order(tmp_path):
    service, handler = make_service(tmp_path)
    registered = service.application.handlers[0]

    assert isinstance(registered[0], CommandHandler)
    assert registered[0].commands == frozenset({"start"})
    assert registered[0].callback == handler.start_command
    assert isinstance(registered[1], CommandHandler)
    assert registered[1].commands == frozenset({"help"})
    assert isinstance(registered[2], MessageHandler)
    assert registered[2].callback == handler.handle_text
    assert handler.error_handler in service.application.error_handlers


def test_stop_without_launch_cancels_cleanup(tmp_path):
    service, _ = make_service(tmp_path)
    leftover = tmp_path / "left.png"
    leftover.write_bytes(b"x")

    async def scenario():
        service.cleanup.schedule(leftover, 60)
        await service.stop()

    asyncio.run(scenario())

    assert not leftover.exists()
    assert len(service.cleanup) == 0
