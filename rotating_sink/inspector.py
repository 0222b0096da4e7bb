"""Inspector logic: rescan a stream's files on disk and read them back."""

import gzip
import os
from dataclasses import dataclass, field

from rotating_sink.namer import ArchiveName, parse_archive_name, slot_path, split_extension

GZIP_MAGIC = b"\x1f\x8b"


@dataclass
class StreamListing:
    slots: list[tuple[int, str]] = field(default_factory=list)
    archives: list[tuple[ArchiveName, str]] = field(default_factory=list)

    @property
    def gaps(self) -> list[int]:
        """Slot indices missing below the highest slot present."""
        present = {index for index, _ in self.slots}
        if not present:
            return []
        return [i for i in range(max(present)) if i not in present]


def list_stream_files(base_path: str, compressed_ext: str = ".gz") -> StreamListing:
    """Return the rotation slots and archives of the stream at *base_path*.

    Slots are sorted by index, archives by generation then timestamp.
    """
    base_path = os.fspath(base_path)
    directory = os.path.dirname(base_path) or "."
    stem, ext = split_extension(os.path.basename(base_path))
    listing = StreamListing()
    if not os.path.isdir(directory):
        return listing

    names = set(os.listdir(directory))
    for name in names:
        parsed = parse_archive_name(name, stem, ext, compressed_ext)
        if parsed is not None:
            listing.archives.append((parsed, os.path.join(directory, name)))
    listing.archives.sort(key=lambda item: (item[0].generation, item[0].timestamp))

    if os.path.basename(base_path) in names:
        listing.slots.append((0, base_path))
    for name in names:
        index = _slot_index(name, stem, ext)
        if index is not None:
            listing.slots.append((index, slot_path(base_path, index)))
    listing.slots.sort()
    return listing


def _slot_index(name: str, stem: str, ext: str) -> int | None:
    if not name.startswith(stem + ".") or not name.endswith(ext):
        return None
    middle = name[len(stem) + 1:len(name) - len(ext)] if ext else name[len(stem) + 1:]
    if not middle.isdigit() or str(int(middle)) != middle or middle == "0":
        return None
    return int(middle)


def open_stream_file(path: str):
    """Open a slot or archive for text reading; gzip is detected from the header."""
    with open(path, "rb") as probe:
        compressed = probe.read(len(GZIP_MAGIC)) == GZIP_MAGIC
    if compressed:
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")


def iter_records(path: str):
    """Yield the newline-terminated records of one stream file in order."""
    with open_stream_file(path) as f:
        yield from f
