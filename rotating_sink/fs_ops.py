"""Filesystem operations returning explicit results instead of raising.

Rename and delete report an ``OpResult`` so callers can implement the
retry-once-then-escalate policy as plain control flow.
"""

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class OpStatus(Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class OpResult:
    status: OpStatus
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.status is OpStatus.SUCCESS


SUCCESS = OpResult(OpStatus.SUCCESS)

# Errors that another attempt cannot fix.
_FATAL_ERRORS = (FileNotFoundError, NotADirectoryError, IsADirectoryError)


def classify(exc: OSError) -> OpResult:
    if isinstance(exc, _FATAL_ERRORS):
        return OpResult(OpStatus.FATAL, exc)
    return OpResult(OpStatus.RETRYABLE, exc)


class FileSystem:
    """Thin wrapper over ``os`` used by the rotator and archiver.

    Tests subclass it to inject failures.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def listdir(self, path: str) -> list[str]:
        return os.listdir(path)

    def rename(self, src: str, dst: str) -> OpResult:
        try:
            os.rename(src, dst)
        except OSError as exc:
            return classify(exc)
        return SUCCESS

    def remove(self, path: str) -> OpResult:
        try:
            os.remove(path)
        except OSError as exc:
            return classify(exc)
        return SUCCESS


def rename_with_retry(fs: FileSystem, src: str, dst: str, delay: float,
                      overwrite: bool = True, sleep_func=None) -> OpResult:
    """Rename *src* to *dst*, retrying once after *delay* seconds.

    With *overwrite*, an existing *dst* is deleted first since rename is not
    assumed to replace its target. Only a RETRYABLE first failure is retried.
    """
    sleep = sleep_func or time.sleep

    result = _rename(fs, src, dst, overwrite)
    if result.ok or result.status is OpStatus.FATAL:
        return result

    logger.warning("Rename %s -> %s failed (%s), retrying in %.0fms",
                   src, dst, result.error, delay * 1000)
    sleep(delay)
    return _rename(fs, src, dst, overwrite)


def _rename(fs: FileSystem, src: str, dst: str, overwrite: bool) -> OpResult:
    if overwrite and fs.exists(dst):
        fs.remove(dst)
    return fs.rename(src, dst)
