"""Turning a skeleton definition into a concrete, absolute tree.

Every dir, file and template destination is passed through slot substitution
and then anchored: an absolute result is used as-is, a relative one is joined
under the project root.  Include paths are anchored under the config directory
instead, since include files live next to the skeleton definitions.
"""

from __future__ import annotations

from pathlib import Path

from skel.errors import ResolveError
from skel.scaffolder.models import ResolvedTree, SkeletonDefinition, TemplateEntry
from skel.templating import SubstitutionContext, substitute


def resolve(definition: SkeletonDefinition, ctx: SubstitutionContext) -> ResolvedTree:
    """Resolve *definition* against *ctx*.

    Files and templates add their parent directory to ``dirs``.  Duplicate
    entries collapse silently.

    Raises:
        ResolveError: If a template has neither a body nor an include, or its
            include file cannot be read.  No partial tree is returned.
    """
    if ctx.root is None or ctx.config_dir is None:
        raise ValueError("resolve() needs a context with root and config_dir set")

    root = Path(ctx.root)
    config_dir = Path(ctx.config_dir)
    tree = ResolvedTree()

    for raw in definition.dirs or []:
        tree.dirs.add(_anchor(root, substitute(ctx, raw)))

    for raw in definition.files or []:
        file_path = _anchor(root, substitute(ctx, raw))
        tree.files.add(file_path)
        tree.dirs.add(file_path.parent)

    for entry in definition.templates or []:
        destination = _anchor(root, substitute(ctx, entry.path))
        tree.templates[destination] = _template_content(entry, destination, ctx, config_dir)
        tree.dirs.add(destination.parent)

    return tree


def _template_content(
    entry: TemplateEntry,
    destination: Path,
    ctx: SubstitutionContext,
    config_dir: Path,
) -> str:
    if entry.include is not None:
        include_path = _anchor(config_dir, substitute(ctx, entry.include))
        try:
            raw = include_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ResolveError(
                f"Include file not found: {include_path} (template {destination})",
                path=include_path,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ResolveError(
                f"Could not read include file {include_path} (template {destination}): {exc}",
                path=include_path,
            ) from exc
        return substitute(ctx, raw)

    if entry.body is not None:
        return substitute(ctx, entry.body)

    raise ResolveError(
        f"Template entry has no 'template' body or 'include' path: {destination}",
        path=destination,
    )


def _anchor(base: Path, path_str: str) -> Path:
    path = Path(path_str)
    if path.is_absolute():
        return path
    return base / path
