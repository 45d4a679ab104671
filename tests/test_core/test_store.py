"""Unit tests for gopackage.core.store."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from gopackage.core.store import RecordStore
from gopackage.exceptions import FileOperationError, RecordError
from gopackage.models import DepsRecord


@pytest.fixture
def record() -> DepsRecord:
    return DepsRecord(
        packages=["app/cmd1", "app/cmd2"],
        go_version="go1.21.3",
        dependencies=["github.com/x/a", "github.com/x/b"],
    )


@pytest.mark.unit
class TestRecordStorePath:
    """Tests for record path resolution."""

    def test_default_is_gopackage_json_in_cwd(self, tmp_path: Path) -> None:
        with patch("gopackage.core.store.Path.cwd", return_value=tmp_path):
            store = RecordStore()

        assert store.path == tmp_path / "gopackage.json"

    def test_relative_path_uses_base_dir(self, tmp_path: Path) -> None:
        store = RecordStore("deps/record.json", base_dir=tmp_path)

        assert store.path == tmp_path / "deps" / "record.json"

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere.json"

        assert RecordStore(target, base_dir="/ignored").path == target


@pytest.mark.unit
class TestRecordStoreReadWrite:
    """Tests for RecordStore.write / read."""

    def test_write_produces_expected_json(
        self, tmp_path: Path, record: DepsRecord
    ) -> None:
        store = RecordStore(base_dir=tmp_path)

        written = store.write(record)

        assert written == (tmp_path / "gopackage.json").resolve()
        assert json.loads(written.read_text(encoding="utf-8")) == {
            "packages": ["app/cmd1", "app/cmd2"],
            "goVersion": "go1.21.3",
            "dependencies": ["github.com/x/a", "github.com/x/b"],
        }

    def test_read_returns_written_record(self, tmp_path: Path, record: DepsRecord) -> None:
        store = RecordStore(base_dir=tmp_path)
        store.write(record)

        assert store.read() == record

    def test_write_replaces_previous_snapshot(
        self, tmp_path: Path, record: DepsRecord
    ) -> None:
        store = RecordStore(base_dir=tmp_path)
        store.write(record)

        store.write(DepsRecord(packages=["other"], go_version="go1.22"))

        assert store.read() == DepsRecord(packages=["other"], go_version="go1.22")

    def test_exists(self, tmp_path: Path, record: DepsRecord) -> None:
        store = RecordStore(base_dir=tmp_path)
        assert store.exists() is False

        store.write(record)
        assert store.exists() is True

    def test_read_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            RecordStore(base_dir=tmp_path).read()

        assert exc_info.value.operation == "read"
        assert "run 'gopackage load' first" in str(exc_info.value)

    def test_read_malformed_content_raises(self, tmp_path: Path) -> None:
        (tmp_path / "gopackage.json").write_text("{broken", encoding="utf-8")

        with pytest.raises(RecordError) as exc_info:
            RecordStore(base_dir=tmp_path).read()

        assert exc_info.value.file_path == str(tmp_path / "gopackage.json")

    def test_reads_record_written_by_older_tools(self, tmp_path: Path) -> None:
        """Test extra keys such as BuildGoPath are tolerated."""
        (tmp_path / "gopackage.json").write_text(
            json.dumps(
                {
                    "packages": ["app"],
                    "goVersion": "go1.4",
                    "dependencies": ["github.com/x/a"],
                    "BuildGoPath": "/old/gopackage",
                },
                indent=2,
            ),
            encoding="utf-8",
        )

        assert RecordStore(base_dir=tmp_path).read() == DepsRecord(
            ["app"], "go1.4", ["github.com/x/a"]
        )
