"""Age compressed archives and compress the slot pushed out of rotation.

Archives are named ``<stem>.<generation><ext>.<timestamp>.gz``. Each pass
moves every archive one generation older, deletes those at the retention
ceiling (``max_files + max_compressed_files - 1``) and then turns slot
``max_files`` into a new archive at generation ``max_files``.
"""

import logging
import os
from datetime import datetime, timezone

from rotating_sink.compression import GzipCodec
from rotating_sink.errors import ArchiveError
from rotating_sink.fs_ops import FileSystem, rename_with_retry
from rotating_sink.namer import (
    TIMESTAMP_FORMAT,
    ArchiveName,
    archive_path,
    parse_archive_name,
    slot_path,
    split_extension,
)

logger = logging.getLogger(__name__)

AGING_RETRY_DELAY = 0.01


class Archiver:
    def __init__(self, base_path: str, max_files: int, max_compressed_files: int,
                 fs: FileSystem | None = None, codec: GzipCodec | None = None,
                 time_func=None, retry_delay: float = AGING_RETRY_DELAY, sleep_func=None):
        self._base_path = base_path
        self._max_files = max_files
        self._max_compressed_files = max_compressed_files
        self._fs = fs or FileSystem()
        self._codec = codec or GzipCodec()
        self._time_func = time_func or (lambda: datetime.now(timezone.utc))
        self._retry_delay = retry_delay
        self._sleep_func = sleep_func

        self._dir = os.path.dirname(base_path) or "."
        self._stem, self._ext = split_extension(os.path.basename(base_path))

    @property
    def ceiling(self) -> int:
        """Archives at or above this generation are deleted instead of aged."""
        return self._max_files + self._max_compressed_files - 1

    def archive(self) -> str | None:
        """Run one aging pass, then compress the overflow slot.

        Returns the new archive path, or None when nothing was compressed.
        """
        self.age_archives()
        return self.compress_overflow()

    def scan(self) -> list[ArchiveName]:
        """Archives of this stream currently in the directory, oldest first."""
        if not self._fs.is_dir(self._dir):
            return []
        try:
            names = self._fs.listdir(self._dir)
        except OSError as exc:
            raise ArchiveError(f"Failed scanning {self._dir}") from exc

        found = []
        for name in names:
            parsed = parse_archive_name(name, self._stem, self._ext, self._codec.compressed_ext)
            if parsed is not None:
                found.append(parsed)
        found.sort(key=lambda a: (a.generation, a.timestamp), reverse=True)
        return found

    def age_archives(self):
        # One snapshot per pass, highest generation first: each file is aged
        # at most once and its target slot has already been vacated.
        for archive in self.scan():
            src = self._path(archive)
            if archive.generation >= self.ceiling:
                result = self._fs.remove(src)
                if not result.ok:
                    raise ArchiveError(f"Failed deleting {src}", src=src) from result.error
                logger.info("Deleted expired archive %s", src)
                continue

            target = self._path(archive.with_generation(archive.generation + 1))
            if self._fs.exists(target):
                raise ArchiveError(
                    f"Refusing to age {src}: {target} already exists", src=src, dst=target
                )
            result = rename_with_retry(self._fs, src, target, self._retry_delay,
                                       overwrite=False, sleep_func=self._sleep_func)
            if not result.ok:
                raise ArchiveError(
                    f"Failed renaming {src} to {target}", src=src, dst=target
                ) from result.error
            logger.debug("Aged %s -> %s", src, target)

    def compress_overflow(self) -> str | None:
        overflow = slot_path(self._base_path, self._max_files)
        if not self._fs.exists(overflow):
            return None

        if self._max_compressed_files == 0:
            result = self._fs.remove(overflow)
            if not result.ok:
                logger.warning("Could not delete overflow slot %s: %s", overflow, result.error)
            return None

        timestamp = self._time_func().strftime(TIMESTAMP_FORMAT)
        target = archive_path(overflow, timestamp, self._codec.compressed_ext)
        if not self._codec.compress(overflow, target):
            logger.warning("Compression of %s failed, keeping plaintext for next cycle", overflow)
            return None

        result = self._fs.remove(overflow)
        if not result.ok:
            logger.warning("Compressed %s but could not delete it: %s", overflow, result.error)
        logger.info("Archived %s -> %s", overflow, target)
        return target

    def _path(self, archive: ArchiveName) -> str:
        return os.path.join(self._dir, archive.filename)
