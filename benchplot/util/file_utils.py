import json
from pathlib import Path
from typing import Any, Optional


def load_json(file_path: Path) -> Any:
    """
    Load a JSON document from disk.

    Args:
        file_path (Path): Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
        PermissionError: If the file cannot be read
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ValueError(f"{path} is not valid UTF-8: {e}") from e


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of `path` if needed and return `path`."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def file_format(path: Path) -> Optional[str]:
    """
    Lowercase file extension without the dot, e.g. 'svg' for 'plot.SVG'.

    Returns None when the path has no extension.
    """
    suffix = Path(path).suffix
    if not suffix or suffix == ".":
        return None
    return suffix[1:].lower()
