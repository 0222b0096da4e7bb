"""Tests for rotating_sink/fs_ops.py: result classification and rename retry."""

import errno

from rotating_sink.fs_ops import (
    FileSystem,
    OpResult,
    OpStatus,
    SUCCESS,
    classify,
    rename_with_retry,
)


class ScriptedFileSystem(FileSystem):
    """Returns queued results from rename() before falling back to the real one."""

    def __init__(self, results):
        self.results = list(results)
        self.rename_calls = []

    def rename(self, src, dst):
        self.rename_calls.append((src, dst))
        if self.results:
            return self.results.pop(0)
        return super().rename(src, dst)


BUSY = OpResult(OpStatus.RETRYABLE, PermissionError(errno.EACCES, "busy"))


class TestClassify:
    def test_missing_file_is_fatal(self):
        assert classify(FileNotFoundError(errno.ENOENT, "gone")).status is OpStatus.FATAL

    def test_permission_error_is_retryable(self):
        assert classify(PermissionError(errno.EACCES, "denied")).status is OpStatus.RETRYABLE

    def test_error_is_kept(self):
        exc = OSError(errno.EBUSY, "busy")
        assert classify(exc).error is exc


class TestFileSystem:
    def test_rename_and_remove(self, tmp_path):
        fs = FileSystem()
        src = tmp_path / "a.log"
        src.write_text("x")
        assert fs.rename(str(src), str(tmp_path / "b.log")).ok
        assert fs.exists(str(tmp_path / "b.log"))
        assert fs.remove(str(tmp_path / "b.log")).ok
        assert fs.listdir(str(tmp_path)) == []

    def test_rename_missing_source_is_fatal(self, tmp_path):
        result = FileSystem().rename(str(tmp_path / "nope"), str(tmp_path / "dst"))
        assert result.status is OpStatus.FATAL
        assert isinstance(result.error, FileNotFoundError)

    def test_remove_missing_is_fatal(self, tmp_path):
        assert FileSystem().remove(str(tmp_path / "nope")).status is OpStatus.FATAL


class TestRenameWithRetry:
    def test_success_first_try_does_not_sleep(self, tmp_path):
        (tmp_path / "a").write_text("x")
        sleeps = []
        result = rename_with_retry(FileSystem(), str(tmp_path / "a"), str(tmp_path / "b"),
                                   0.1, sleep_func=sleeps.append)
        assert result is SUCCESS
        assert sleeps == []

    def test_retries_once_after_delay(self, tmp_path):
        (tmp_path / "a").write_text("x")
        fs = ScriptedFileSystem([BUSY])
        sleeps = []
        result = rename_with_retry(fs, str(tmp_path / "a"), str(tmp_path / "b"),
                                   0.1, sleep_func=sleeps.append)
        assert result.ok
        assert sleeps == [0.1]
        assert len(fs.rename_calls) == 2
        assert (tmp_path / "b").read_text() == "x"

    def test_second_failure_is_returned(self, tmp_path):
        fs = ScriptedFileSystem([BUSY, BUSY])
        result = rename_with_retry(fs, "a", "b", 0.01, sleep_func=lambda _: None)
        assert result.status is OpStatus.RETRYABLE
        assert len(fs.rename_calls) == 2

    def test_fatal_is_not_retried(self):
        fatal = OpResult(OpStatus.FATAL, FileNotFoundError())
        fs = ScriptedFileSystem([fatal])
        sleeps = []
        result = rename_with_retry(fs, "a", "b", 0.1, sleep_func=sleeps.append)
        assert result is fatal
        assert sleeps == []
        assert len(fs.rename_calls) == 1

    def test_overwrite_deletes_existing_target(self, tmp_path):
        (tmp_path / "a").write_text("new")
        (tmp_path / "b").write_text("old")
        result = rename_with_retry(FileSystem(), str(tmp_path / "a"), str(tmp_path / "b"), 0)
        assert result.ok
        assert (tmp_path / "b").read_text() == "new"

    def test_no_overwrite_leaves_target_alone(self, tmp_path):
        fs = ScriptedFileSystem([SUCCESS])
        (tmp_path / "b").write_text("old")
        rename_with_retry(fs, str(tmp_path / "a"), str(tmp_path / "b"), 0, overwrite=False)
        assert (tmp_path / "b").read_text() == "old"
