"""Creating a resolved tree on disk, or rendering it for a dry run.

Materialization is linear: precheck, directories, empty files, templates.  The
precheck is the only safety net; once creation starts, a failure leaves the
tree partially built and is reported through ``MaterializeError``.
"""

from __future__ import annotations

from pathlib import Path

from skel.errors import AlreadyExistsError, MaterializeError
from skel.scaffolder.models import ResolvedTree


def precheck(root: str | Path) -> None:
    """Refuse to touch a destination that already exists.

    Raises:
        AlreadyExistsError: If anything is present at *root*.
    """
    root_path = Path(root)
    # is_symlink catches dangling links, which exists() reports as missing
    if root_path.exists() or root_path.is_symlink():
        raise AlreadyExistsError(root_path)


def create_tree(
    tree: ResolvedTree, root: str | Path, *, make_templates: bool = True
) -> None:
    """Create *root*, then every directory, empty file and template in *tree*.

    Creating a directory that already exists is not an error.  Existing files
    are truncated.  No precheck is done here.

    Raises:
        MaterializeError: On the first file-system failure.
    """
    root_path = Path(root)
    for directory in [root_path, *sorted(tree.dirs)]:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MaterializeError(directory, "dirs", str(exc)) from exc

    for file_path in sorted(tree.files):
        try:
            file_path.write_bytes(b"")
        except OSError as exc:
            raise MaterializeError(file_path, "files", str(exc)) from exc

    if not make_templates:
        return

    for template_path, content in sorted(tree.templates.items()):
        try:
            with template_path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except OSError as exc:
            raise MaterializeError(template_path, "templates", str(exc)) from exc


def materialize(
    tree: ResolvedTree, root: str | Path, *, make_templates: bool = True
) -> None:
    """Run the precheck and then create the whole tree under *root*."""
    precheck(root)
    create_tree(tree, root, make_templates=make_templates)


def render_tree(
    tree: ResolvedTree,
    root: str | Path,
    *,
    build: str | None = None,
    build_first: bool = False,
) -> str:
    """Describe what ``materialize`` would do, without touching the disk.

    Output is sorted so the same tree always renders the same way.  When
    *root* already exists a warning line is put first instead of failing.
    """
    root_path = Path(root)
    lines: list[str] = []

    if root_path.exists():
        lines.append(f"Warning: {root_path} already exists")
        lines.append("")

    lines.append(f"would make in to -> {root_path}")
    for directory in sorted(tree.dirs):
        lines.append(f"  dir  -> {directory}")
    for file_path in sorted(tree.files):
        lines.append(f"  file -> {file_path}")

    for template_path, content in sorted(tree.templates.items()):
        lines.append("  ------")
        lines.append(f"  template -> {template_path}")
        for line in content.splitlines():
            lines.append(f"    {line}")
        lines.append("  ------")

    if build is not None:
        lines.append(f"  build first = {str(build_first).lower()}")
        lines.append("  ------")
        for line in build.splitlines():
            lines.append(f"    {line}")
        lines.append("  ------")

    return "\n".join(lines)
