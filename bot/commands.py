"""Slash command handlers: /search and /pull."""
import asyncio
from dataclasses import dataclass
from typing import List

import discord

from bot.archiver import ArchiveWriter, renamed_filename
from bot.config import BotSettings
from bot.exceptions import (
    ArchiveError,
    CommandError,
    MoveNotFound,
    NoAttachmentsFound,
    NotInThread,
    SizeLimitExceeded,
    UploadError,
)
from bot.logging_client import setup_logger
from bot.move_list import MoveList
from bot.uploader import Uploader
from bot.utils import attachment_extension, format_search_reply, is_video_attachment

logger = setup_logger('gsoh-bot-commands')


@dataclass
class Submission:
    """A video attachment collected from the thread, with its author."""

    attachment: discord.Attachment
    author: str


class CommandHandlers:
    """Handlers behind the slash commands.

    Holds only read-only state shared by every invocation: the move list,
    the settings and the uploader. Each call is self-contained.
    """

    def __init__(self, move_list: MoveList, uploader: Uploader, settings: BotSettings):
        self.move_list = move_list
        self.uploader = uploader
        self.settings = settings
        self.max_archive_bytes = settings.max_archive_size_bytes

    # ------------------------------------------------------------------
    # /search
    # ------------------------------------------------------------------

    async def search(self, interaction: discord.Interaction, search_term: str):
        """Reply with every move containing the search term."""
        matches = self.move_list.search(search_term)
        logger.info(
            f"🔍 /search '{search_term}' by {interaction.user}: {len(matches)} match(es)"
        )
        await interaction.response.send_message(
            format_search_reply(search_term, matches),
            ephemeral=True
        )

    # ------------------------------------------------------------------
    # /pull
    # ------------------------------------------------------------------

    async def pull(self, interaction: discord.Interaction, move_name: str):
        """Zip every video in the thread, upload it and reply with the link."""
        # Collecting attachments and uploading takes longer than the 3s window
        await interaction.response.defer(ephemeral=True, thinking=True)
        logger.info(f"📦 /pull '{move_name}' by {interaction.user} in channel {interaction.channel_id}")

        try:
            reply = await self._pull(interaction, move_name)
        except (ArchiveError, UploadError) as e:
            logger.error(f"/pull '{move_name}' failed: {e}")
            reply = str(e)
        except CommandError as e:
            logger.warning(f"/pull '{move_name}' rejected: {e}")
            reply = str(e)

        await interaction.followup.send(reply, ephemeral=True)

    async def _pull(self, interaction: discord.Interaction, move_name: str) -> str:
        thread = interaction.channel
        if not isinstance(thread, discord.Thread):
            raise NotInThread()

        if move_name not in self.move_list:
            raise MoveNotFound(move_name)

        submissions = await self.collect_submissions(thread)
        if not submissions:
            raise NoAttachmentsFound()

        limit = self.max_archive_bytes
        declared = sum(s.attachment.size for s in submissions)
        if declared > limit:
            # Reject before downloading anything
            raise SizeLimitExceeded(limit=limit, total=declared)

        with ArchiveWriter(limit) as writer:
            await self.write_entries(writer, move_name, submissions)
            archive = await asyncio.to_thread(writer.finish)
            logger.info(f"Built archive for '{move_name}': {len(submissions)} file(s), {writer.total} bytes of video")

            result = await self.uploader.upload(archive, f"{move_name}.zip")

        hours = result.expires_in_hours
        return f"{result.url}\nLink expires in {hours} hour{'s' if hours != 1 else ''}"

    async def collect_submissions(self, thread: discord.Thread) -> List[Submission]:
        """
        Walk the whole thread history, oldest first, and keep video attachments.

        Args:
            thread: Thread the command was run in

        Returns:
            List of submissions in thread order
        """
        allowed = self.settings.ALLOWED_VIDEO_EXTENSIONS
        submissions = []
        async for message in thread.history(limit=None, oldest_first=True):
            for attachment in message.attachments:
                if is_video_attachment(attachment, allowed):
                    submissions.append(
                        Submission(attachment=attachment, author=message.author.display_name)
                    )

        logger.info(f"Collected {len(submissions)} video(s) from thread {thread.id}")
        return submissions

    async def write_entries(
        self,
        writer: ArchiveWriter,
        move_name: str,
        submissions: List[Submission]
    ):
        """
        Download each submission and write it to the archive under its new name.

        Only one video is held in memory at a time; zip writes run in a worker
        thread.

        Raises:
            ArchiveError: If an attachment cannot be downloaded or written
            SizeLimitExceeded: If the downloaded bytes pass the archive limit
        """
        for submission in submissions:
            attachment = submission.attachment
            name = renamed_filename(
                move_name,
                submission.author,
                attachment.id,
                attachment_extension(attachment)
            )
            try:
                data = await attachment.read()
            except discord.HTTPException as e:
                raise ArchiveError(f"Failed to download `{attachment.filename}`: {e}") from e
            await asyncio.to_thread(writer.add, name, data)
            del data
