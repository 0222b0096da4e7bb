"""CLI log inspector: list and read a stream's rotation slots and archives."""

import argparse
import os
import sys

from rotating_sink.inspector import iter_records, list_stream_files


def _human_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inspect a rotating log stream")
    parser.add_argument("--base-path",
                        default=os.environ.get("LOG_BASE_PATH", "./logs/application.log"),
                        help="Live log file of the stream")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--list", action="store_true", help="List slots and archives")
    group.add_argument("--read", metavar="PATH", help="Print a slot or archive")
    args = parser.parse_args(argv)

    if args.list:
        listing = list_stream_files(args.base_path)
        if not listing.slots and not listing.archives:
            print("No log files found.")
            return
        for index, path in listing.slots:
            print(f"  slot {index:<3} {path}  ({_human_size(os.path.getsize(path))})")
        for archive, path in listing.archives:
            print(f"  gen  {archive.generation:<3} {path}  ({_human_size(os.path.getsize(path))})")
        if listing.gaps:
            print(f"Warning: missing slots {listing.gaps}", file=sys.stderr)

    elif args.read:
        try:
            for line in iter_records(args.read):
                sys.stdout.write(line)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
