from pathlib import Path
from typing import Any, Union

import yaml


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML rules document; an empty file yields an empty mapping."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Projection rules file not found: {path}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(
            f"Projection rules in {path} must be a mapping at the top level, "
            f"got {type(data).__name__}"
        )
    return data
