"""Tests for rotating_sink/compression.py: GzipCodec."""

import gzip
import os

from rotating_sink.compression import GzipCodec


def _make_log_data(n_entries: int = 200) -> bytes:
    return b"".join(
        f"2026-02-17 12:00:00.000 [INFO] [auth-api] request #{i} ok\n".encode()
        for i in range(n_entries)
    )


class TestGzipCodec:
    def test_compress_writes_gzip(self, tmp_path):
        src = tmp_path / "app.3.log"
        dst = tmp_path / "app.3.log.20260217_120000_000000.gz"
        data = _make_log_data()
        src.write_bytes(data)

        assert GzipCodec().compress(str(src), str(dst)) is True

        with gzip.open(dst, "rb") as f:
            assert f.read() == data
        assert os.path.getsize(dst) < len(data)

    def test_source_is_left_in_place(self, tmp_path):
        src = tmp_path / "app.3.log"
        src.write_bytes(b"x\n")
        GzipCodec().compress(str(src), str(tmp_path / "out.gz"))
        assert src.exists()

    def test_missing_source_reports_failure(self, tmp_path):
        dst = tmp_path / "out.gz"
        assert GzipCodec().compress(str(tmp_path / "missing.log"), str(dst)) is False
        assert not dst.exists()

    def test_refuses_to_overwrite(self, tmp_path):
        src = tmp_path / "app.3.log"
        src.write_bytes(b"new\n")
        dst = tmp_path / "out.gz"
        dst.write_bytes(b"existing")
        assert GzipCodec().compress(str(src), str(dst)) is False
        assert dst.read_bytes() == b"existing"

    def test_level_is_clamped(self):
        assert GzipCodec(level=0).level == 1
        assert GzipCodec(level=42).level == 9
        assert GzipCodec().compressed_ext == ".gz"
