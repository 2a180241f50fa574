"""Move catalog loaded once at startup.

The catalog is a flat text file with one move identifier per line, e.g.
``02-false_shuffles-0107-conleys_three_riffle_variation``. It is never
mutated after loading, so every command task can read it concurrently.
"""
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from bot.exceptions import ResourceError
from bot.logging_client import setup_logger

logger = setup_logger('gsoh-bot')


class MoveList:
    """Read-only, ordered list of move identifiers."""

    def __init__(self, entries: List[str]):
        self._entries: Tuple[str, ...] = tuple(entries)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MoveList":
        """
        Load a move list from a text file.

        Args:
            path: Path to the newline-delimited move list

        Returns:
            MoveList with one entry per non-empty line, in file order

        Raises:
            ResourceError: If the file is missing or unreadable
        """
        try:
            text = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceError(f"Failed to read move list {path}: {e}") from e

        entries = [line.strip() for line in text.splitlines()]
        move_list = cls([entry for entry in entries if entry])
        logger.info(f"Loaded {len(move_list)} moves from {path}")
        return move_list

    def search(self, term: str) -> List[str]:
        """
        Case-insensitive substring search.

        An empty term matches every entry. Matches keep file order.
        """
        needle = term.lower()
        return [entry for entry in self._entries if needle in entry.lower()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
