"""Shift the numbered rotation slots one step older.

    app.log   -> app.1.log
    app.1.log -> app.2.log
    app.2.log -> app.3.log   (app.3.log is overwritten)
"""

import logging

from rotating_sink.errors import RotationError
from rotating_sink.file_helper import LogFile
from rotating_sink.fs_ops import FileSystem, rename_with_retry
from rotating_sink.namer import slot_path

logger = logging.getLogger(__name__)

RENAME_RETRY_DELAY = 0.1


class Rotator:
    def __init__(self, base_path: str, max_files: int, log_file: LogFile,
                 fs: FileSystem | None = None, retry_delay: float = RENAME_RETRY_DELAY,
                 sleep_func=None):
        self._base_path = base_path
        self._max_files = max_files
        self._log_file = log_file
        self._fs = fs or FileSystem()
        self._retry_delay = retry_delay
        self._sleep_func = sleep_func

    def rotate(self):
        """Shift slots ``max_files-1 .. 0`` up by one, then reopen slot 0 empty.

        Raises RotationError if a rename still fails after one retry; slot 0
        is truncated first so the live file never grows past its bound.
        """
        self._log_file.close()
        for i in range(self._max_files, 0, -1):
            src = slot_path(self._base_path, i - 1)
            if not self._fs.exists(src):
                continue
            target = slot_path(self._base_path, i)

            result = rename_with_retry(self._fs, src, target, self._retry_delay,
                                       sleep_func=self._sleep_func)
            if not result.ok:
                self._log_file.reopen(truncate=True)
                raise RotationError(
                    f"Failed renaming {src} to {target}", src=src, dst=target
                ) from result.error

        self._log_file.reopen(truncate=True)
        logger.info("Rotated %s (%d slots)", self._base_path, self._max_files)
