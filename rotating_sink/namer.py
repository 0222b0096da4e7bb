"""Path naming for rotation slots and compressed archives. No I/O."""

import os
import re
from dataclasses import dataclass

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"
# What TIMESTAMP_FORMAT renders to.
TIMESTAMP_PATTERN = r"[0-9]{8}_[0-9]{6}_[0-9]{6}"


def split_extension(name: str) -> tuple[str, str]:
    """Split *name* into ``(stem, ext)`` on the last dot of its filename part.

    ``"logs/app.log"`` -> ``("logs/app", ".log")``. Names without a dot,
    dot-files such as ``".bashrc"`` and names ending in a dot get an empty
    extension. Dots in directory components are ignored.
    """
    ext_index = name.rfind(".")
    if ext_index <= 0 or ext_index == len(name) - 1:
        return name, ""

    folder_index = max(name.rfind("/"), name.rfind(os.sep))
    if folder_index != -1 and folder_index >= ext_index - 1:
        return name, ""

    return name[:ext_index], name[ext_index:]


def slot_path(base: str, index: int) -> str:
    """Return the path of rotation slot *index*.

    slot_path("logs/app.log", 3) -> "logs/app.3.log"
    """
    if index == 0:
        return base
    stem, ext = split_extension(base)
    return f"{stem}.{index}{ext}"


def archive_path(slot_file: str, timestamp: str, compressed_ext: str = ".gz") -> str:
    """Archive name for a compressed slot: ``<slot_file>.<timestamp><compressed_ext>``."""
    return f"{slot_file}.{timestamp}{compressed_ext}"


@dataclass(frozen=True)
class ArchiveName:
    stem: str
    generation: int
    ext: str
    timestamp: str
    compressed_ext: str

    @property
    def filename(self) -> str:
        return f"{self.stem}.{self.generation}{self.ext}.{self.timestamp}{self.compressed_ext}"

    def with_generation(self, generation: int) -> "ArchiveName":
        """Same archive at another generation; the timestamp is kept verbatim."""
        return ArchiveName(self.stem, generation, self.ext, self.timestamp, self.compressed_ext)


def parse_archive_name(name: str, stem: str, ext: str,
                       compressed_ext: str = ".gz") -> ArchiveName | None:
    """Parse a directory entry name as an archive of the ``stem``/``ext`` stream.

    *stem* is the bare filename stem (no directory). Returns None for
    anything else, including the live file and plain rotation slots.
    """
    pattern = (
        re.escape(stem) + r"\.(?P<generation>[0-9]+)" + re.escape(ext)
        + r"\.(?P<timestamp>" + TIMESTAMP_PATTERN + ")" + re.escape(compressed_ext)
    )
    match = re.fullmatch(pattern, name)
    if match is None:
        return None
    return ArchiveName(
        stem=stem,
        generation=int(match.group("generation")),
        ext=ext,
        timestamp=match.group("timestamp"),
        compressed_ext=compressed_ext,
    )
