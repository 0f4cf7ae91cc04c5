"""Literal slot substitution for skeleton paths and file bodies.

Three markers are recognised::

    {{name}}        the new project's name
    {{root}}        absolute path of the project being created
    {{config-dir}}  directory holding the registry / skeleton definitions

Substitution is plain text replacement.  There is no escaping and no other
template syntax, so any text that is not one of the markers passes through
untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

NAME_MARKER = "{{name}}"
ROOT_MARKER = "{{root}}"
CONFIG_DIR_MARKER = "{{config-dir}}"


@dataclass(frozen=True)
class SubstitutionContext:
    """Values for the three slots.

    A slot left as ``None`` is not substituted; its marker stays in the output.
    The registry uses this to fill ``{{config-dir}}`` before the project name
    and root are known.
    """

    name: str | None = None
    root: str | None = None
    config_dir: str | None = None

    @classmethod
    def for_project(
        cls, name: str, root: str | Path, config_dir: str | Path
    ) -> "SubstitutionContext":
        return cls(name=name, root=str(root), config_dir=str(config_dir))

    @classmethod
    def for_config_dir(cls, config_dir: str | Path) -> "SubstitutionContext":
        return cls(config_dir=str(config_dir))

    def slots(self) -> dict[str, str]:
        """Return ``{marker: value}`` for every slot that is set."""
        pairs = (
            (NAME_MARKER, self.name),
            (ROOT_MARKER, self.root),
            (CONFIG_DIR_MARKER, self.config_dir),
        )
        return {marker: value for marker, value in pairs if value is not None}


_MARKER_RE = re.compile(
    "|".join(re.escape(m) for m in (NAME_MARKER, ROOT_MARKER, CONFIG_DIR_MARKER))
)


def substitute(ctx: SubstitutionContext, source: str) -> str:
    """Replace every slot marker in *source* with its value from *ctx*.

    A single left-to-right pass is made, so a slot value that itself contains
    a marker is inserted literally and never expanded again.
    """
    slots = ctx.slots()
    if not slots:
        return source
    return _MARKER_RE.sub(lambda m: slots.get(m.group(0), m.group(0)), source)
