import json
from pathlib import Path
from typing import Any, Dict


def load_artifact(path: Path) -> Any:
    """Read and parse one artifact; OSError and ValueError (bad JSON) propagate."""
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        raise json.JSONDecodeError("Empty artifact file", "", 0)
    return json.loads(content)


def save_result(path: Path, result: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
