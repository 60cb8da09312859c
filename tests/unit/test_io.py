from pathlib import Path

import pytest

from rolemap.utils.io import read_json


def test_read_json(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text('[{"id": "size", "levels": ["ordinal"]}]', encoding="utf-8")
    assert read_json(path) == [{"id": "size", "levels": ["ordinal"]}]
    assert read_json(str(path))[0]["id"] == "size"


def test_read_missing_document(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="No schema document"):
        read_json(tmp_path / "missing.json")


def test_read_directory(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="got a directory"):
        read_json(tmp_path)


def test_read_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid JSON"):
        read_json(path)
