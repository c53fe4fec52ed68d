"""Tests for persisting receipts and loading them back."""

import json
import os
import stat
from datetime import datetime, timedelta, timezone

import pytest

from rcpt import writer
from rcpt._internal import atomic_io
from rcpt.errors import ReceiptWriteError, SerializationError
from rcpt.receipt import Receipt
from rcpt.writer import load_receipt, receipt_to_json, write_receipt


@pytest.fixture
def receipt() -> Receipt:
    start = datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)
    return Receipt(
        command="echo",
        args=["hello", "world"],
        exit_code=None,
        stdout="hello world\n",
        stderr="",
        start_time=start,
        end_time=start + timedelta(milliseconds=7),
        duration_ms=7,
    )


def test_write_then_load_is_equivalent(tmp_path, receipt):
    path = write_receipt(tmp_path / "receipt.json", receipt)
    loaded = load_receipt(path)
    assert loaded == receipt
    assert loaded.exit_code is None


def test_written_bytes_are_canonical(tmp_path, receipt):
    path = tmp_path / "receipt.json"
    write_receipt(path, receipt)
    assert path.read_text(encoding="utf-8") == receipt_to_json(receipt)


def test_creates_missing_parent_directories(tmp_path, receipt):
    path = tmp_path / "a" / "b" / "c.json"
    write_receipt(path, receipt)
    assert path.is_file()
    assert json.loads(path.read_text(encoding="utf-8"))["command"] == "echo"


def test_existing_parent_is_fine(tmp_path, receipt):
    (tmp_path / "out").mkdir()
    write_receipt(tmp_path / "out" / "r.json", receipt)
    write_receipt(tmp_path / "out" / "r.json", receipt)
    assert (tmp_path / "out" / "r.json").is_file()


def test_bare_filename_writes_to_cwd(tmp_path, monkeypatch, receipt):
    monkeypatch.chdir(tmp_path)
    path = write_receipt("receipt.json", receipt)
    assert (tmp_path / "receipt.json").is_file()
    assert str(path) == "receipt.json"


def test_existing_file_is_overwritten(tmp_path, receipt):
    path = tmp_path / "receipt.json"
    path.write_text("stale", encoding="utf-8")
    write_receipt(path, receipt)
    assert load_receipt(path) == receipt


def test_parent_is_a_file_raises_write_error(tmp_path, receipt):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    target = blocker / "receipt.json"
    with pytest.raises(ReceiptWriteError) as excinfo:
        write_receipt(target, receipt)
    assert excinfo.value.path == target
    assert str(target) in str(excinfo.value)


def test_failed_commit_leaves_original_and_no_temp_files(tmp_path, monkeypatch, receipt):
    path = tmp_path / "receipt.json"
    path.write_text("previous", encoding="utf-8")

    def _fail(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(atomic_io.os, "replace", _fail)
    with pytest.raises(ReceiptWriteError, match="No space left on device"):
        write_receipt(path, receipt)

    assert path.read_text(encoding="utf-8") == "previous"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["receipt.json"]


def test_unencodable_receipt_raises_serialization_error(tmp_path, monkeypatch, receipt):
    def _boom(obj):
        raise TypeError("Object of type bytes is not JSON serializable")

    monkeypatch.setattr(writer, "pretty_dumps", _boom)
    with pytest.raises(SerializationError, match="Failed to serialize receipt"):
        write_receipt(tmp_path / "receipt.json", receipt)
    assert not (tmp_path / "receipt.json").exists()


def test_load_rejects_malformed_receipt(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"command": "echo"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_receipt(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_receipt(tmp_path / "missing.json")


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_written_file_respects_umask(tmp_path, receipt):
    umask = os.umask(0o022)
    try:
        path = write_receipt(tmp_path / "receipt.json", receipt)
    finally:
        os.umask(umask)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
