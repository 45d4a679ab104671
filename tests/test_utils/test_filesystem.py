from __future__ import annotations

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from gopackage.utils.filesystem import (
    _validated_file,
    _atomic_write,
    ensure_directory,
    safe_read_file,
    safe_write_file,
)
from gopackage.exceptions import FileOperationError


@pytest.fixture
def temp_file(tmp_path: Path) -> Path:
    """Create a temporary file with sample content."""
    file_path = tmp_path / "test.txt"
    file_path.write_text("test content", encoding="utf-8")
    return file_path


@pytest.mark.unit
class TestValidatedFile:
    """Tests for _validated_file internal helper."""

    def test_returns_resolved_path(self, temp_file: Path) -> None:
        result = _validated_file(temp_file)

        assert result.is_absolute()
        assert result == temp_file.resolve()

    def test_rejects_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.json"

        with pytest.raises(FileOperationError) as exc_info:
            _validated_file(missing)

        assert "not found" in str(exc_info.value).lower()
        assert exc_info.value.file_path == str(missing)
        assert exc_info.value.operation == "read"

    def test_rejects_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            _validated_file(tmp_path)

        assert "not a file" in str(exc_info.value).lower()


@pytest.mark.unit
class TestAtomicWrite:
    """Tests for _atomic_write internal helper."""

    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "output.json"

        _atomic_write(target, '{"a": 1}')

        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_replaces_existing_content(self, temp_file: Path) -> None:
        _atomic_write(temp_file, "new")

        assert temp_file.read_text(encoding="utf-8") == "new"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.txt"

        _atomic_write(target, "x")

        assert target.exists()

    def test_leaves_no_temporary_files(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"

        _atomic_write(target, "x")

        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]

    def test_failure_cleans_up_and_raises(self, tmp_path: Path) -> None:
        """Test a failed replace removes the temporary file."""
        target = tmp_path / "out.txt"

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(FileOperationError) as exc_info:
                _atomic_write(target, "x")

        assert exc_info.value.operation == "write"
        assert isinstance(exc_info.value.original_error, OSError)
        assert list(tmp_path.iterdir()) == []


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_content(self, temp_file: Path) -> None:
        assert safe_read_file(temp_file) == "test content"

    def test_accepts_string_path(self, temp_file: Path) -> None:
        assert safe_read_file(str(temp_file)) == "test content"

    def test_rejects_oversized_file(self, temp_file: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(temp_file, max_size=4)

        assert "too large" in str(exc_info.value).lower()

    def test_size_limit_can_be_disabled(self, temp_file: Path) -> None:
        assert safe_read_file(temp_file, max_size=None) == "test content"

    def test_decode_error_is_wrapped(self, tmp_path: Path) -> None:
        binary = tmp_path / "binary.bin"
        binary.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(binary)

        assert exc_info.value.operation == "read"


@pytest.mark.unit
class TestSafeWriteFile:
    """Tests for safe_write_file."""

    def test_writes_and_returns_resolved_path(self, tmp_path: Path) -> None:
        target = tmp_path / "record.json"

        result = safe_write_file(target, "{}\n")

        assert result == target.resolve()
        assert target.read_text(encoding="utf-8") == "{}\n"


@pytest.mark.unit
class TestEnsureDirectory:
    """Tests for ensure_directory."""

    def test_creates_nested_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "gopackage" / "server"

        result = ensure_directory(target)

        assert result.is_dir()
        assert result == target.resolve()

    def test_existing_directory_is_fine(self, tmp_path: Path) -> None:
        assert ensure_directory(tmp_path) == tmp_path.resolve()

    def test_file_in_the_way_raises(self, temp_file: Path) -> None:
        with pytest.raises(FileOperationError) as exc_info:
            ensure_directory(temp_file / "sub")

        assert exc_info.value.operation == "mkdir"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions only")
    def test_applies_mode(self, tmp_path: Path) -> None:
        old_umask = os.umask(0)
        try:
            result = ensure_directory(tmp_path / "bin", mode=0o750)
        finally:
            os.umask(old_umask)

        assert result.stat().st_mode & 0o777 == 0o750
