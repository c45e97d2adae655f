"""Target loader - reads and validates the YAML targets file."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..schemas import HttpCheck, TcpCheck, Target, SUPPORTED_TYPES

logger = logging.getLogger(__name__)

ALLOWED_ARGS = {
    "http": ("url",),
    "tcp": ("host", "port"),
}


class TargetsFileError(Exception):
    """The targets file could not be read or is invalid."""


class RawTarget(BaseModel):
    """A target entry as written in the file, before per-type validation."""
    name: str
    type: str
    args: Dict[str, Any] = Field(default_factory=dict)


class TargetsFile(BaseModel):
    targets: List[RawTarget]


def _describe(error: dict, idx: int, type_name: str) -> str:
    """Turn the first pydantic error for a check into a readable message."""
    arg = str(error["loc"][0]) if error["loc"] else "?"
    prefix = f"Target #{idx} ({type_name})"

    if error["type"] == "missing":
        return f"{prefix}: missing required arg '{arg}'"
    if arg == "port":
        if error["type"] in ("greater_than_equal", "less_than_equal"):
            return f"{prefix}: 'port' must be a valid port number (1-65535)"
        return f"{prefix}: 'port' must be a number"
    if error["type"] == "string_type":
        return f"{prefix}: '{arg}' must be a string"
    return f"{prefix}: invalid arg '{arg}': {error['msg']}"


def validate_targets(raw_targets: List[RawTarget]) -> List[Target]:
    """Convert raw entries into typed targets, failing on the first bad one."""
    targets = []

    for idx, raw in enumerate(raw_targets, start=1):
        if raw.type not in SUPPORTED_TYPES:
            raise TargetsFileError(
                f"Target #{idx}: unsupported type '{raw.type}'. "
                f"Supported types: {', '.join(SUPPORTED_TYPES)}"
            )

        allowed = ALLOWED_ARGS[raw.type]
        for key in raw.args:
            if key not in allowed:
                raise TargetsFileError(
                    f"Target #{idx} ({raw.type}): unknown arg '{key}'. "
                    f"Allowed args: {', '.join(allowed)}"
                )

        model = HttpCheck if raw.type == "http" else TcpCheck
        try:
            check = model.model_validate(raw.args)
        except ValidationError as e:
            raise TargetsFileError(_describe(e.errors()[0], idx, raw.type)) from e

        targets.append(Target(name=raw.name, check=check))

    return targets


def load_targets(path: Union[str, Path]) -> List[Target]:
    """Load the targets file at `path`.

    Raises TargetsFileError with a message suitable for the user.
    """
    path = Path(path)
    try:
        content = path.read_text()
    except OSError as e:
        raise TargetsFileError(f"Failed to read targets file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise TargetsFileError(f"Failed to parse targets file: {e}") from e

    try:
        parsed = TargetsFile.model_validate(data)
    except ValidationError as e:
        raise TargetsFileError(f"Failed to parse targets file: {e}") from e

    if not parsed.targets:
        raise TargetsFileError("No targets defined in the targets file")

    targets = validate_targets(parsed.targets)
    logger.info(f"Loaded {len(targets)} target(s) from {path}")
    return targets
