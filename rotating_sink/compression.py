"""Gzip codec used to turn an evicted rotation slot into an archive."""

import gzip
import logging
import os
import shutil

logger = logging.getLogger(__name__)


class GzipCodec:
    """Compresses one plaintext file into a new gzip file.

    ``compress`` never raises for I/O problems; it reports success or
    failure so the caller can decide whether to remove the source.
    """

    compressed_ext = ".gz"

    def __init__(self, level: int = 6):
        self._level = max(1, min(9, level))

    @property
    def level(self) -> int:
        return self._level

    def compress(self, src: str, dst: str) -> bool:
        if os.path.exists(dst):
            logger.warning("Archive %s already exists, not overwriting", dst)
            return False
        try:
            with open(src, "rb") as f_in, gzip.open(dst, "wb", compresslevel=self._level) as f_out:
                shutil.copyfileobj(f_in, f_out)
        except OSError:
            logger.exception("Compression of %s into %s failed", src, dst)
            try:
                if os.path.exists(dst):
                    os.remove(dst)
            except OSError as exc:
                logger.warning("Could not remove partial archive %s: %s", dst, exc)
            return False
        return True
