"""Data models for skeleton definitions and resolved trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class TemplateEntry(BaseModel):
    """A file whose content comes from an inline body or an include file.

    In skeleton files the inline body is written as ``template``; ``body`` is
    accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(..., min_length=1, description="Destination, relative to the project root")
    body: str | None = Field(default=None, alias="template")
    include: str | None = Field(default=None, description="File to read the content from")


class SkeletonDefinition(BaseModel):
    """A parsed skeleton file.  Strings are kept raw, with markers intact."""

    dirs: list[str] | None = None
    files: list[str] | None = None
    templates: list[TemplateEntry] | None = None
    build: str | None = None
    build_first: bool = False

    def is_empty(self) -> bool:
        """True when the skeleton has no dirs, files, templates or build script."""
        return not (self.dirs or self.files or self.templates or self.build)


@dataclass
class ResolvedTree:
    """Absolute directories, empty files and rendered templates to create."""

    dirs: set[Path] = field(default_factory=set)
    files: set[Path] = field(default_factory=set)
    templates: dict[Path, str] = field(default_factory=dict)

    def counts(self) -> dict[str, int]:
        return {
            "dirs": len(self.dirs),
            "files": len(self.files),
            "templates": len(self.templates),
        }
