"""Zip archive construction for /pull.

Archives are written to an anonymous temporary file, one member at a time,
so a pull never holds more than one video in memory.
"""
import tempfile
import zipfile
from typing import BinaryIO, Iterable, Tuple

from bot.exceptions import ArchiveError, SizeLimitExceeded

_UNSAFE_NAME_CHARS = str.maketrans({'/': '_', '\\': '_'})


def renamed_filename(move_name: str, author: str, attachment_id: int, extension: str) -> str:
    """
    Build the archive member name for one attachment.

    Format is ``<move_name>-<author>-<attachment_id>.<ext>``. The attachment id
    keeps names unique even when two authors upload identically named files.
    Path separators in the author's display name become ``_`` so every member
    extracts into the archive's top directory.

    Args:
        move_name: Move the videos belong to
        author: Display name of the uploader
        attachment_id: Discord attachment snowflake
        extension: File extension, with or without the leading dot

    Returns:
        str: Archive member name
    """
    author = author.translate(_UNSAFE_NAME_CHARS)
    return f"{move_name}-{author}-{attachment_id}.{extension.lstrip('.')}"


class ArchiveWriter:
    """Incremental zip writer backed by a temporary file.

    Example:
        with ArchiveWriter(limit=512 * 1024 * 1024) as writer:
            writer.add("foo-alice-1.mov", data)
            archive = writer.finish()
            await uploader.upload(archive, "foo.zip")
    """

    def __init__(self, limit: int):
        """
        Args:
            limit: Maximum cumulative content size in bytes
        """
        self.limit = limit
        self.total = 0
        self._names = set()
        try:
            self.file = tempfile.TemporaryFile()
        except OSError as e:
            raise ArchiveError(f"Failed to create archive: {e}") from e
        self._zip = zipfile.ZipFile(self.file, mode='w', compression=zipfile.ZIP_STORED)

    def add(self, name: str, data: bytes):
        """
        Write one stored member.

        Raises:
            SizeLimitExceeded: If ``data`` would take the total past the limit
            ArchiveError: On a duplicate member name or a write fault
        """
        total = self.total + len(data)
        if total > self.limit:
            raise SizeLimitExceeded(limit=self.limit, total=total)
        if name in self._names:
            raise ArchiveError(f"Duplicate file name in archive: {name}")

        try:
            self._zip.writestr(name, data)
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Failed to write archive: {e}") from e

        self._names.add(name)
        self.total = total

    def finish(self) -> BinaryIO:
        """
        Complete the archive and return its file, rewound to the start.

        The file stays owned by the writer and is removed by ``close()``.
        """
        try:
            self._zip.close()
            self.file.seek(0)
        except (OSError, ValueError) as e:
            raise ArchiveError(f"Failed to finish writing archive: {e}") from e
        return self.file

    def close(self):
        """Discard the temporary file."""
        self.file.close()

    def __enter__(self) -> "ArchiveWriter":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def build_archive(entries: Iterable[Tuple[str, bytes]], limit: int) -> BinaryIO:
    """
    Write entries into a temporary zip file, in input order.

    Members are stored uncompressed (video is already compressed).

    Args:
        entries: (member name, content) pairs, consumed lazily
        limit: Maximum cumulative content size in bytes

    Returns:
        BinaryIO: The complete archive, rewound; the caller closes it

    Raises:
        SizeLimitExceeded: As soon as the running total passes ``limit``
        ArchiveError: On duplicate member names or any write fault
    """
    writer = ArchiveWriter(limit)
    try:
        for name, data in entries:
            writer.add(name, data)
        return writer.finish()
    except BaseException:
        writer.close()
        raise
