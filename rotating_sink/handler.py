"""stdlib ``logging`` integration for the compressed rotating sink."""

import logging

from rotating_sink.compression import GzipCodec
from rotating_sink.locks import NullLock
from rotating_sink.sink import CompressedRotatingSink


class CompressedRotatingFileHandler(logging.Handler):
    """Handler writing through a CompressedRotatingSink.

    ``logging.Handler.handle`` already holds the handler lock around
    ``emit``, so the sink itself runs with a NullLock.

        handler = CompressedRotatingFileHandler("logs/app.log", max_bytes=1_000_000,
                                                backup_count=3, max_compressed_files=5)
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, filename, max_bytes: int, backup_count: int,
                 max_compressed_files: int = 10, rotate_on_open: bool = False,
                 encoding: str = "utf-8", compression_level: int = 6, **sink_kwargs):
        super().__init__()
        self.encoding = encoding
        self.sink = CompressedRotatingSink(
            filename,
            max_bytes,
            backup_count,
            max_compressed_files,
            rotate_on_open,
            lock=NullLock(),
            formatter=self._encode,
            codec=GzipCodec(compression_level),
            **sink_kwargs,
        )

    @property
    def baseFilename(self) -> str | None:
        return self.sink.filename

    def _encode(self, line: str) -> bytes:
        return (line + "\n").encode(self.encoding)

    def emit(self, record: logging.LogRecord):
        try:
            self.sink.write(self.format(record))
        except Exception:
            self.handleError(record)

    def flush(self):
        self.acquire()
        try:
            self.sink.flush()
        finally:
            self.release()

    def close(self):
        self.acquire()
        try:
            self.sink.close()
        finally:
            self.release()
        super().close()
