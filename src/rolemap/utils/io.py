import json
from pathlib import Path
from typing import Any


def read_json(filepath: str | Path) -> Any:
    """
    Decode the JSON document stored at `filepath` (UTF-8).

    Raises:
        FileNotFoundError: If nothing exists at `filepath`.
        ValueError: If `filepath` is a directory or the content is not JSON.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"No schema document at {path}")
    if path.is_dir():
        raise ValueError(f"Expected a schema document, got a directory: {path}")

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
