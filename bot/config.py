"""Discord bot configuration."""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MOVE_LIST_PATH = str(Path(__file__).parent / "data" / "move-list.txt")


class BotSettings(BaseSettings):
    """Bot configuration with environment variable support."""

    DISCORD_TOKEN: str

    # Move catalog (one move identifier per line)
    MOVE_LIST_PATH: str = DEFAULT_MOVE_LIST_PATH

    # Optional guild for instant slash command sync while developing
    SYNC_GUILD_ID: Optional[int] = None

    # Upload Settings
    UPLOAD_URL: str = "https://0x0.st"
    USER_AGENT: str = "GsohDiscordBot/1.0 (https://github.com/tufourn/gsoh-discord-bot)"
    UPLOAD_TIMEOUT_SECONDS: float = 300.0
    LINK_EXPIRY_HOURS: int = 1  # Enforced by the file host, not by us

    # Archive Settings
    MAX_ARCHIVE_SIZE_MB: int = 512  # Cumulative size of all videos in one /pull
    ALLOWED_VIDEO_EXTENSIONS: List[str] = ['.mov', '.mp4']

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True
    )

    @property
    def max_archive_size_bytes(self) -> int:
        """Archive ceiling in bytes (MB here means MiB)."""
        return self.MAX_ARCHIVE_SIZE_MB * 1024 * 1024
