"""Binary append-only handle on the live log file."""

import os


class LogFile:
    def __init__(self):
        self._file = None
        self._filename: str | None = None

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def open(self, filename: str, truncate: bool = False):
        self.close()
        self._filename = filename
        parent = os.path.dirname(filename)
        if parent:
            os.makedirs(parent, exist_ok=True)
        if truncate:
            # Truncate, then reopen in append mode so every write lands at the end.
            with open(filename, "wb"):
                pass
        self._file = open(filename, "ab")

    def reopen(self, truncate: bool = False):
        if self._filename is None:
            raise OSError("Failed re opening file - was not opened before")
        self.open(self._filename, truncate)

    def write(self, data: bytes):
        if self.closed:
            raise OSError(f"Failed writing to closed file {self._filename}")
        self._file.write(data)

    def flush(self):
        if self.closed:
            return
        self._file.flush()
        os.fsync(self._file.fileno())

    def close(self):
        if self._file is not None and not self._file.closed:
            self._file.close()
        self._file = None

    def size(self) -> int:
        """Size of the open file from fstat, without reading it."""
        if self.closed:
            raise OSError(f"Cannot use size() on closed file {self._filename}")
        self._file.flush()
        return os.fstat(self._file.fileno()).st_size
