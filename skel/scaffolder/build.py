"""Running a skeleton's build script."""

from __future__ import annotations

from pathlib import Path

from skel.errors import BuildError
from skel.templating import SubstitutionContext, substitute
from skel.utils import run_command

BUILD_SHEBANG = "#!/usr/bin/env bash\n\n"


def make_build_script(script: str, ctx: SubstitutionContext) -> str:
    """Prefix the shebang and fill in the slots."""
    return substitute(ctx, BUILD_SHEBANG + script)


def build_cwd(root: str | Path) -> Path | None:
    """Pick the working directory for the build.

    The project root when it exists (build runs after the tree), otherwise
    its parent so a build-first script can create the root itself.
    """
    root_path = Path(root)
    if root_path.is_dir():
        return root_path
    if root_path.parent.is_dir():
        return root_path.parent
    return None


async def run_build(
    script: str,
    ctx: SubstitutionContext,
    root: str | Path,
    *,
    show_output: bool = False,
    timeout: int = 600,
) -> None:
    """Run *script* with bash.

    Output is captured and dropped unless *show_output* is set, in which case
    the script writes straight to the terminal.

    Raises:
        BuildError: If bash exits non-zero or the timeout is hit.
    """
    bash_script = make_build_script(script, ctx)
    returncode, _stdout, stderr = await run_command(
        ["bash", "-c", bash_script],
        cwd=build_cwd(root),
        timeout=timeout,
        capture=not show_output,
    )
    if returncode != 0:
        message = f"Build script failed (exit {returncode})"
        if stderr:
            message = f"{message}:\n{stderr}"
        raise BuildError(message, returncode=returncode, stderr=stderr)
