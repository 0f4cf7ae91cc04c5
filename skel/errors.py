"""Exception hierarchy for skel.

Every failure the engine can surface derives from ``SkelError`` so the CLI can
catch a single type, print the message and choose an exit code.  Nothing in the
core recovers from these locally.
"""

from __future__ import annotations

from pathlib import Path


class SkelError(Exception):
    """Base class for all skel failures."""


class ConfigError(SkelError):
    """Raised when a registry or skeleton definition is missing or malformed."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class DuplicateAliasError(ConfigError):
    """Raised when registry entries share keys or aliases.

    ``duplicates`` holds one ``(key_1, key_2, shared)`` tuple per conflicting
    pair of entries, where ``shared`` lists the overlapping names.
    """

    def __init__(
        self,
        duplicates: list[tuple[str, str, list[str]]],
        path: str | Path | None = None,
    ) -> None:
        self.duplicates = duplicates
        super().__init__(_format_duplicates(duplicates), path=path)


class SkeletonNotFoundError(SkelError):
    """Raised when no skeleton name or alias matches the requested target."""

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"No skeleton or alias matching '{target}'")


class ResolveError(SkelError):
    """Raised when a template entry cannot be turned into file content."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class AlreadyExistsError(SkelError):
    """Raised when the destination root exists before materialization."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Project destination already exists: {self.path}")


class MaterializeError(SkelError):
    """Raised when a file-system operation fails part way through a tree.

    ``stage`` is one of ``"dirs"``, ``"files"`` or ``"templates"``; everything
    created before the failing ``path`` is left in place.
    """

    def __init__(self, path: str | Path, stage: str, reason: str = "") -> None:
        self.path = Path(path)
        self.stage = stage
        message = f"Failed to create {self.path} while writing {stage}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BuildError(SkelError):
    """Raised when the skeleton's build script fails."""

    def __init__(self, message: str, returncode: int = -1, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def _format_duplicates(duplicates: list[tuple[str, str, list[str]]]) -> str:
    lines = ["duplicate keys or aliases found"]
    for key_1, key_2, shared in duplicates:
        lines.append(f"keys [{key_1}, {key_2}]")
        lines.append(f"    alias: [{', '.join(shared)}]")
    return "\n".join(lines)
