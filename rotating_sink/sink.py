"""Size-based rotating file sink that gzips the backups it pushes out.

    sink = compressed_rotating_sink_mt("logs/app.log", max_size=1024 * 1024,
                                       max_files=3, max_compressed_files=5)
    sink.write("service started")

On disk: ``app.log`` (live), ``app.1.log`` .. ``app.2.log`` (rotation
slots) and ``app.<g>.log.<timestamp>.gz`` archives for ``g`` in ``3..7``.
"""

import logging
import os
from typing import Any

from rotating_sink.archiver import Archiver
from rotating_sink.compression import GzipCodec
from rotating_sink.config import SinkConfig
from rotating_sink.file_helper import LogFile
from rotating_sink.formatter import format_text, get_formatter
from rotating_sink.fs_ops import FileSystem
from rotating_sink.locks import NullLock, make_lock
from rotating_sink.namer import slot_path
from rotating_sink.rotator import Rotator

logger = logging.getLogger(__name__)


class CompressedRotatingSink:
    def __init__(self, base_path: str, max_size: int, max_files: int,
                 max_compressed_files: int = 10, rotate_on_open: bool = False, *,
                 lock=None, formatter=None, fs: FileSystem | None = None,
                 codec: GzipCodec | None = None, time_func=None, sleep_func=None):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if max_files < 1:
            raise ValueError(f"max_files must be at least 1, got {max_files}")
        if max_compressed_files < 0:
            raise ValueError(f"max_compressed_files must be >= 0, got {max_compressed_files}")

        base_path = os.fspath(base_path)
        self._base_path = base_path
        self._max_size = max_size
        self._lock = lock if lock is not None else make_lock(True)
        self._formatter = formatter or format_text

        fs = fs or FileSystem()
        self._file = LogFile()
        self._rotator = Rotator(base_path, max_files, self._file, fs=fs, sleep_func=sleep_func)
        self._archiver = Archiver(base_path, max_files, max_compressed_files, fs=fs,
                                  codec=codec, time_func=time_func, sleep_func=sleep_func)

        self._file.open(slot_path(base_path, 0))
        try:
            self._current_size = self._file.size()  # probed once
            if rotate_on_open and self._current_size > 0:
                logger.info("Rotating non-empty %s on open (%d bytes)", base_path, self._current_size)
                self._rotate_and_archive()
        except BaseException:
            self._file.close()
            raise

    @classmethod
    def from_config(cls, config: SinkConfig, **kwargs) -> "CompressedRotatingSink":
        kwargs.setdefault("lock", make_lock(config.thread_safe))
        kwargs.setdefault("formatter", get_formatter(config.record_format))
        kwargs.setdefault("codec", GzipCodec(config.compression_level))
        return cls(
            config.base_path,
            config.max_size,
            config.max_files,
            config.max_compressed_files,
            config.rotate_on_open,
            **kwargs,
        )

    @property
    def filename(self) -> str | None:
        return self._file.filename

    @property
    def current_size(self) -> int:
        return self._current_size

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def thread_safe(self) -> bool:
        """False when the sink was built with a NullLock."""
        return not isinstance(self._lock, NullLock)

    def write(self, record: Any):
        """Append one record, rotating first if it would push the file past max_size.

        Raises RotationError or ArchiveError if the rotation pass fails; the
        record is not written in that case.
        """
        data = self._formatter(record)
        with self._lock:
            if self._current_size + len(data) > self._max_size:
                self._rotate_and_archive()
            self._file.write(data)
            self._current_size += len(data)

    def flush(self):
        with self._lock:
            self._file.flush()

    def close(self):
        with self._lock:
            self._file.close()

    def _rotate_and_archive(self):
        try:
            self._rotator.rotate()
        finally:
            # Slot 0 is truncated even when the shift fails.
            self._current_size = 0
        self._archiver.archive()


def compressed_rotating_sink_mt(base_path: str, max_size: int, max_files: int,
                                max_compressed_files: int = 10, rotate_on_open: bool = False,
                                **kwargs) -> CompressedRotatingSink:
    """Sink guarded by a real lock, safe to share between threads."""
    return CompressedRotatingSink(base_path, max_size, max_files, max_compressed_files,
                                  rotate_on_open, lock=make_lock(True), **kwargs)


def compressed_rotating_sink_st(base_path: str, max_size: int, max_files: int,
                                max_compressed_files: int = 10, rotate_on_open: bool = False,
                                **kwargs) -> CompressedRotatingSink:
    """Sink with a no-op lock, for use from a single thread only."""
    return CompressedRotatingSink(base_path, max_size, max_files, max_compressed_files,
                                  rotate_on_open, lock=NullLock(), **kwargs)
