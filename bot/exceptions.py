"""Custom exceptions for the move catalog bot."""
from bot.utils import shorten


class BotError(Exception):
    """Base exception for the bot."""
    pass


class ResourceError(BotError):
    """Raised when the move list cannot be read. Fatal at startup."""
    pass


class CommandError(BotError):
    """Base for failures reported back to the user who ran a command.

    The exception message is the reply text.
    """
    pass


class NotInThread(CommandError):
    """Raised when /pull is used outside a thread."""

    def __init__(self, message: str = "This command must be run in a thread"):
        super().__init__(message)


class MoveNotFound(CommandError):
    """Raised when /pull names a move that is not in the move list."""

    def __init__(self, move_name: str):
        self.move_name = move_name
        super().__init__(
            f"Move `{shorten(move_name)}` not found, use `/search <search_term>` to get the move name"
        )


class NoAttachmentsFound(CommandError):
    """Raised when the thread has no .mov or .mp4 attachments."""

    def __init__(self, message: str = "No video (.mov or .mp4) found in this thread"):
        super().__init__(message)


class SizeLimitExceeded(CommandError):
    """Raised when the archive would grow past the size ceiling."""

    def __init__(self, limit: int, total: int):
        self.limit = limit
        self.total = total
        super().__init__(
            f"Size limit {limit // (1024 * 1024)}MB exceeded "
            f"({total / (1024 * 1024):.1f}MB of videos in this thread), nothing was uploaded"
        )


class ArchiveError(CommandError):
    """Raised when building the zip archive fails."""
    pass


class UploadError(CommandError):
    """Raised when the file host rejects the upload or cannot be reached."""
    pass
