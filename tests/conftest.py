"""Pytest configuration for bot tests."""
import os
from unittest.mock import AsyncMock, MagicMock

# Set test environment variables BEFORE importing bot modules
os.environ.setdefault("DISCORD_TOKEN", "test-discord-token")

import discord
import pytest

from bot.commands import CommandHandlers
from bot.config import BotSettings
from bot.move_list import MoveList
from bot.uploader import UploadResult

MOVES = [
    "01-riffle_shuffles-0012-table_riffle_basics",
    "02-false_shuffles-0101-zarrow_shuffle",
    "02-false_shuffles-0107-conleys_three_riffle_variation",
    "04-controls-0302-classic_pass",
]


def make_attachment(attachment_id: int, filename: str, data: bytes = b"", size: int = None):
    """Fake discord.Attachment whose bytes are served by read()."""
    attachment = MagicMock(spec=discord.Attachment)
    attachment.id = attachment_id
    attachment.filename = filename
    attachment.size = len(data) if size is None else size
    attachment.read = AsyncMock(return_value=data)
    return attachment


def make_message(author: str, attachments):
    """Fake discord.Message posted by ``author``."""
    message = MagicMock()
    message.author.display_name = author
    message.attachments = list(attachments)
    return message


def make_thread(messages, thread_id: int = 555):
    """Fake discord.Thread whose history yields ``messages``."""
    thread = MagicMock(spec=discord.Thread)
    thread.id = thread_id

    async def history(**kwargs):
        for message in messages:
            yield message

    thread.history = MagicMock(side_effect=history)
    return thread


def make_interaction(channel):
    """Fake discord.Interaction run in ``channel``."""
    interaction = MagicMock()
    interaction.channel = channel
    interaction.channel_id = getattr(channel, "id", 1)
    interaction.user = "tester"
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


@pytest.fixture
def settings():
    """Settings built without relying on a .env file."""
    return BotSettings(DISCORD_TOKEN="test-discord-token")


@pytest.fixture
def move_list():
    return MoveList(MOVES)


@pytest.fixture
def uploader():
    """Uploader stub that always succeeds.

    The archive file is closed once /pull returns, so its content is read
    during the call and kept in ``stub.uploads`` as (bytes, filename) pairs.
    """
    stub = MagicMock()
    stub.uploads = []

    async def upload(file, filename):
        stub.uploads.append((file.read(), filename))
        return UploadResult(url="https://0x0.st/AbCd.zip/foo.zip", expires_in_hours=1)

    stub.upload = AsyncMock(side_effect=upload)
    return stub


@pytest.fixture
def handlers(move_list, uploader, settings):
    return CommandHandlers(move_list, uploader, settings)
