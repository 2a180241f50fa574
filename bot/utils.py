"""Utility functions for Discord bot."""
from pathlib import PurePath
from typing import Sequence

import discord

DISCORD_MESSAGE_LIMIT = 2000
MAX_ECHOED_TERM_LENGTH = 100


def shorten(text: str, max_length: int = MAX_ECHOED_TERM_LENGTH) -> str:
    """Cut text to max_length characters, marking the cut with an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "…"


def format_search_reply(search_term: str, matches: Sequence[str],
                        max_length: int = DISCORD_MESSAGE_LIMIT) -> str:
    """
    Build the single /search reply, listing one match per line.

    The echoed search term is shortened so the reply always fits in one
    Discord message. When the list does not fit it is cut at a line boundary
    and a note says how many matches were left out.

    Args:
        search_term: Term the user searched for
        matches: Matching move identifiers, in catalog order
        max_length: Maximum reply length

    Returns:
        str: Reply text
    """
    term = shorten(search_term)
    if not matches:
        return f"No move contains \"{term}\""

    reply = f"Moves containing \"{term}\":\n" + "\n".join(matches)
    if len(reply) <= max_length:
        return reply

    # Keep whole lines only, leaving room for the footer
    budget = max_length - 80
    lines = [f"Moves containing \"{term}\":"]
    length = len(lines[0])
    for match in matches:
        if length + 1 + len(match) > budget:
            break
        lines.append(match)
        length += 1 + len(match)

    omitted = len(matches) - (len(lines) - 1)
    lines.append(f"... and {omitted} more, refine your search")
    return "\n".join(lines)


def attachment_extension(attachment: discord.Attachment) -> str:
    """Return the attachment's extension, lowercased with the dot ('' if none)."""
    return PurePath(attachment.filename).suffix.lower()


def is_video_attachment(attachment: discord.Attachment, allowed_extensions: Sequence[str]) -> bool:
    """
    Check whether an attachment is a video we collect, by file extension.

    Args:
        attachment: Discord attachment object
        allowed_extensions: Extensions with leading dot, e.g. ['.mov', '.mp4']

    Returns:
        bool: True if the extension matches (case-insensitive)
    """
    allowed = {ext.lower() for ext in allowed_extensions}
    return attachment_extension(attachment) in allowed
