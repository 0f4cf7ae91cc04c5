"""Reading skeleton definition files."""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import ValidationError

from skel.errors import ConfigError
from skel.scaffolder.models import SkeletonDefinition


def load_definition(path: str | Path) -> SkeletonDefinition:
    """Parse the skeleton TOML file at *path*.

    No substitution happens here; markers are left for the resolver.

    Raises:
        ConfigError: If the file is missing, unreadable, not TOML, or does not
            match the skeleton schema.
    """
    definition_path = Path(path)
    if not definition_path.is_file():
        raise ConfigError("Skeleton file does not exist or is not a file", path=definition_path)

    try:
        raw = tomllib.loads(definition_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read skeleton: {exc}", path=definition_path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Skeleton not formatted correctly: {exc}", path=definition_path
        ) from exc

    try:
        return SkeletonDefinition.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(
            f"Skeleton not formatted correctly: {exc}", path=definition_path
        ) from exc
