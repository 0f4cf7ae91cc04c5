"""Skeleton registry: maps skeleton names and aliases to definition files.

The registry is a TOML file.  Each skeleton is declared either as a table::

    [skeletons.rs]
    path = "{{config-dir}}/skeletons/rust.toml"
    aliases = ["r", "rust"]

or as a bare path with its aliases in a parallel table::

    [skeletons]
    py = "{{config-dir}}/skeletons/python.toml"

    [aliases]
    py = ["p"]

Both forms can be mixed in one file.  Loading fails if any two skeletons share
a key or an alias, or if a skeleton's name is used as an alias elsewhere; all
conflicts are reported together.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from skel.errors import ConfigError, DuplicateAliasError, SkeletonNotFoundError
from skel.templating import SubstitutionContext, substitute


class RegistryEntry(BaseModel):
    """One skeleton declared in the registry."""

    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1, description="Definition path; may use {{config-dir}}")
    aliases: list[str] = Field(default_factory=list)

    @field_validator("aliases")
    @classmethod
    def _dedupe_aliases(cls, value: list[str]) -> list[str]:
        # ordered set semantics
        return list(dict.fromkeys(value))


class Registry:
    """Validated collection of ``RegistryEntry`` objects.

    Construction runs duplicate detection, so every ``Registry`` instance is
    guaranteed unambiguous.
    """

    def __init__(self, entries: list[RegistryEntry], path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        duplicates = find_duplicates(entries)
        if duplicates:
            raise DuplicateAliasError(duplicates, path=self.path)
        self.entries = list(entries)

    def get(self, name: str) -> RegistryEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def resolve(self, target: str) -> str:
        """Return the raw definition path for a skeleton name or alias.

        An exact name match wins over an alias match.

        Raises:
            SkeletonNotFoundError: If nothing matches *target*.
        """
        entry = self.get(target)
        if entry is not None:
            return entry.path

        for entry in self.entries:
            if target in entry.aliases:
                return entry.path

        raise SkeletonNotFoundError(target)

    def names(self) -> list[tuple[str, list[str]]]:
        """Return ``(name, aliases)`` for every skeleton, sorted by name."""
        return sorted((entry.name, list(entry.aliases)) for entry in self.entries)


def find_duplicates(entries: list[RegistryEntry]) -> list[tuple[str, str, list[str]]]:
    """Check every unordered pair of entries for clashing keys or aliases.

    Returns one ``(key_1, key_2, shared)`` tuple per conflicting pair.  A pair
    with identical keys is reported even when ``shared`` is empty.
    """
    duplicates: list[tuple[str, str, list[str]]] = []

    for i, first in enumerate(entries):
        for second in entries[i + 1:]:
            same_key = first.name == second.name
            shared = [alias for alias in first.aliases if alias in second.aliases]
            if first.name in second.aliases and first.name not in shared:
                shared.append(first.name)
            if second.name in first.aliases and second.name not in shared:
                shared.append(second.name)

            if same_key or shared:
                duplicates.append((first.name, second.name, shared))

    return duplicates


def load_registry(path: str | Path) -> Registry:
    """Read, validate and return the registry stored at *path*.

    Raises:
        ConfigError: If the file is missing, not valid TOML, or malformed.
        DuplicateAliasError: If any keys or aliases clash.
    """
    registry_path = Path(path)
    if not registry_path.is_file():
        raise ConfigError("Registry file does not exist or is not a file", path=registry_path)

    try:
        raw = tomllib.loads(registry_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read registry: {exc}", path=registry_path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Registry is not valid TOML: {exc}", path=registry_path) from exc

    entries = _entries_from_mapping(raw, registry_path)
    return Registry(entries, path=registry_path)


def resolve_definition_path(
    registry: Registry, target: str, config_dir: str | Path
) -> Path:
    """Look up *target* and turn its path template into a filesystem path.

    Only the ``{{config-dir}}`` slot is filled here.  A relative result is
    taken relative to *config_dir*.
    """
    raw_path = registry.resolve(target)
    resolved = substitute(SubstitutionContext.for_config_dir(config_dir), raw_path)
    definition_path = Path(resolved).expanduser()
    if not definition_path.is_absolute():
        definition_path = Path(config_dir) / definition_path
    return definition_path


def _entries_from_mapping(raw: dict[str, Any], path: Path) -> list[RegistryEntry]:
    skeletons = raw.get("skeletons", {})
    alias_table = raw.get("aliases", {})
    if not isinstance(skeletons, dict):
        raise ConfigError("'skeletons' must be a table", path=path)
    if not isinstance(alias_table, dict):
        raise ConfigError("'aliases' must be a table", path=path)

    unknown = sorted(set(alias_table) - set(skeletons))
    if unknown:
        raise ConfigError(
            f"Aliases declared for unknown skeletons: {', '.join(unknown)}", path=path
        )

    entries: list[RegistryEntry] = []
    for name, value in skeletons.items():
        extra_aliases = alias_table.get(name, [])
        if isinstance(value, str):
            data: dict[str, Any] = {"name": name, "path": value, "aliases": extra_aliases}
        elif isinstance(value, dict):
            declared = value.get("aliases", [])
            if not isinstance(declared, list) or not isinstance(extra_aliases, list):
                raise ConfigError(f"Aliases for '{name}' must be a list of strings", path=path)
            data = {**value, "name": name, "aliases": declared + extra_aliases}
        else:
            raise ConfigError(
                f"Skeleton '{name}' must be a path string or a table with 'path'", path=path
            )

        try:
            entries.append(RegistryEntry.model_validate(data))
        except ValidationError as exc:
            raise ConfigError(f"Invalid registry entry '{name}': {exc}", path=path) from exc

    return entries
