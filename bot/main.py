"""Discord bot entry point."""
import asyncio
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from bot.client import DiscordBotClient
from bot.config import BotSettings
from bot.exceptions import ResourceError
from bot.logging_client import setup_logger
from bot.move_list import MoveList

load_dotenv()


async def main():
    """Main entry point."""
    logger = setup_logger('gsoh-bot')
    logger.info("Initializing Discord bot...")

    try:
        settings = BotSettings()
    except ValidationError as e:
        logger.critical(f"Invalid configuration (is DISCORD_TOKEN set?):\n{e}")
        sys.exit(1)

    # The bot cannot do anything useful without its move catalog
    try:
        move_list = MoveList.load(settings.MOVE_LIST_PATH)
    except ResourceError as e:
        logger.critical(str(e))
        sys.exit(1)

    bot = DiscordBotClient(settings, move_list)

    logger.info("Starting Discord bot...")
    async with bot:
        await bot.start(settings.DISCORD_TOKEN)


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
