"""End-to-end: drive the demo service and inspect the resulting stream."""

import gzip
import os

import main
from rotating_sink.inspector import list_stream_files


def test_demo_run_rotates_and_archives(tmp_path, monkeypatch):
    for key in ("CONFIG_PATH", "LOG_BASE_PATH", "MAX_SIZE_BYTES", "MAX_SIZE_MB",
                "MAX_FILES", "MAX_COMPRESSED_FILES", "ROTATE_ON_OPEN", "THREAD_SAFE",
                "COMPRESSION_LEVEL", "RECORD_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    base = tmp_path / "logs" / "application.log"

    main.main([
        "--base-path", str(base),
        "--max-size", "1000",
        "--max-files", "2",
        "--max-compressed-files", "3",
        "--count", "300",
        "--interval", "0",
    ])

    listing = list_stream_files(str(base))
    assert [index for index, _ in listing.slots] == [0, 1]
    assert len(listing.archives) == 3
    assert [a.generation for a, _ in listing.archives] == [2, 3, 4]
    assert listing.gaps == []
    for _, path in listing.slots:
        assert os.path.getsize(path) <= 1000
    with gzip.open(listing.archives[0][1], "rt") as f:
        assert "[" in f.readline()


def test_demo_run_json_records(tmp_path, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    base = tmp_path / "app.log"
    main.main(["--base-path", str(base), "--record-format", "json",
               "--count", "5", "--interval", "0"])
    lines = base.read_text().splitlines()
    assert len(lines) == 5
    assert all(line.startswith("{") for line in lines)


def test_record_generator_sequences_records():
    generator = main.RecordGenerator("text", min_payload=4, max_payload=4)
    first = generator.next_record()
    second = generator.next_record()
    assert "seq=00000001 " in first
    assert "seq=00000002 " in second
    assert generator.sequence == 2

    record = main.RecordGenerator("json").next_record()
    assert record["seq"] == 1
    assert 16 <= len(record["payload"]) <= 64
