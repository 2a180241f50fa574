"""Discord bot client."""
import discord
from discord import app_commands
from discord.ext import commands

from bot.commands import CommandHandlers
from bot.config import BotSettings
from bot.logging_client import setup_logger
from bot.move_list import MoveList
from bot.uploader import Uploader

logger = setup_logger('gsoh-bot')


class DiscordBotClient(commands.Bot):
    """Discord bot exposing the /search and /pull slash commands."""

    def __init__(self, settings: BotSettings, move_list: MoveList):
        intents = discord.Intents.default()
        # Attachments of thread history are only delivered with this intent
        intents.message_content = True

        super().__init__(command_prefix="!", intents=intents)

        self.settings = settings
        self.move_list = move_list
        self.uploader = Uploader(
            settings.UPLOAD_URL,
            user_agent=settings.USER_AGENT,
            expiry_hours=settings.LINK_EXPIRY_HOURS,
            timeout=settings.UPLOAD_TIMEOUT_SECONDS
        )
        self.handlers = CommandHandlers(move_list, self.uploader, settings)

        # Register slash commands (tree is already created by commands.Bot)
        self._register_commands()

    def _register_commands(self):
        """Register slash commands."""
        handlers = self.handlers

        @self.tree.command(name="search", description="Search the move list")
        @app_commands.describe(search_term="Search term")
        async def search_command(interaction: discord.Interaction, search_term: str):
            await handlers.search(interaction, search_term)

        @self.tree.command(name="pull", description="Zip all videos in this thread and get a download link")
        @app_commands.describe(move_name="Move name")
        async def pull_command(interaction: discord.Interaction, move_name: str):
            await handlers.pull(interaction, move_name)

        @self.tree.error
        async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
            """Last-resort handler for anything the command handlers did not expect."""
            command_name = interaction.command.name if interaction.command else "unknown"
            logger.error(f"❌ /{command_name} crashed: {error}", exc_info=error)

            message = "❌ Something went wrong, please try again later"
            if interaction.response.is_done():
                await interaction.followup.send(message, ephemeral=True)
            else:
                await interaction.response.send_message(message, ephemeral=True)

    async def setup_hook(self):
        """Setup hook called when bot starts."""
        if self.settings.SYNC_GUILD_ID:
            guild = discord.Object(id=self.settings.SYNC_GUILD_ID)
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info(f"✅ Slash commands synced to guild {self.settings.SYNC_GUILD_ID}")

        # Sync slash commands globally
        await self.tree.sync()
        logger.info("✅ Slash commands synced globally")

    async def on_ready(self):
        """Called when bot is ready."""
        logger.info(f"✅ Logged in as {self.user.name} ({self.user.id})")
        logger.info(f"✅ Serving {len(self.move_list)} moves, uploads go to {self.settings.UPLOAD_URL}")

    async def close(self):
        """Cleanup on shutdown."""
        await self.uploader.aclose()
        await super().close()
