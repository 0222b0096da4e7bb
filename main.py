"""Demo load generator: writes sequenced records through a compressed rotating sink.

Each record carries a sequence number, so a run can be checked for gaps
afterwards with ``log_inspector.py --read``.
"""

import logging
import os
import random
import signal
import string
import sys
import threading
import time
from datetime import datetime, timezone

from rotating_sink.config import build_arg_parser, load_config
from rotating_sink.errors import SinkError
from rotating_sink.sink import CompressedRotatingSink

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [rotating-sink] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


class RecordGenerator:
    """Produces records with a growing sequence number and a random-length payload."""

    def __init__(self, record_format: str = "text", min_payload: int = 16, max_payload: int = 64):
        self.record_format = record_format
        self.min_payload = min_payload
        self.max_payload = max_payload
        self.sequence = 0
        self._pid = os.getpid()

    def _payload(self) -> str:
        length = random.randint(self.min_payload, self.max_payload)
        return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))

    def next_record(self):
        self.sequence += 1
        now = datetime.now(timezone.utc)
        payload = self._payload()
        if self.record_format == "json":
            return {
                "ts": now.isoformat(),
                "pid": self._pid,
                "seq": self.sequence,
                "payload": payload,
            }
        return f"{now.isoformat(timespec='milliseconds')} [pid {self._pid}] seq={self.sequence:08d} {payload}"


def main(argv=None):
    stop = threading.Event()

    def _on_signal(sig, _frame):
        logger.info("Received %s, finishing current record", signal.Signals(sig).name)
        stop.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    parser = build_arg_parser()
    parser.add_argument("--count", type=int, default=0,
                        help="Stop after N records (0 = run until interrupted)")
    parser.add_argument("--interval", type=float, default=0.01,
                        help="Seconds between records")
    args = parser.parse_args(argv)
    config = load_config(argv, parser)

    logger.info(
        "Writing to %s (max_size=%d, max_files=%d, max_compressed_files=%d, "
        "rotate_on_open=%s, thread_safe=%s)",
        config.base_path, config.max_size, config.max_files, config.max_compressed_files,
        config.rotate_on_open, config.thread_safe,
    )

    sink = CompressedRotatingSink.from_config(config)
    generator = RecordGenerator(config.record_format)
    try:
        while not stop.is_set() and (args.count == 0 or generator.sequence < args.count):
            sink.write(generator.next_record())
            if args.interval:
                time.sleep(args.interval)
    except SinkError:
        logger.exception("Rotation failed at record %d", generator.sequence)
        sys.exit(1)
    finally:
        sink.flush()
        sink.close()

    logger.info("Stopped after %d records", generator.sequence)


if __name__ == "__main__":
    main()
