"""skel run orchestration and command-line entry point.

A run goes through these steps:

1. LOCATE   -- find the skeleton file (explicit path or registry lookup).
2. LOAD     -- parse the skeleton definition.
3. RESOLVE  -- substitute slots and read includes into a resolved tree.
4. CREATE   -- precheck the root, then build the tree (or print it for a dry
               run), running the build script before or after as configured.

Usage::

    skel rs demo
    skel rs demo --root ~/code --dry-run
    skel --skeleton-file ./python.toml my-app
    skel --list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.panel import Panel
from rich.text import Text

from skel.config import Config, default_config_path
from skel.errors import ConfigError, SkelError
from skel.registry import load_registry, resolve_definition_path
from skel.scaffolder import (
    ResolvedTree,
    SkeletonDefinition,
    create_tree,
    load_definition,
    precheck,
    render_tree,
    resolve,
    run_build,
)
from skel.templating import SubstitutionContext
from skel.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


class Pipeline:
    """Drives one skeleton run from lookup to a finished tree.

    Attributes:
        config: The run configuration.
        definition: The loaded skeleton, set by :meth:`load_definition`.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.definition: SkeletonDefinition | None = None

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def locate_definition(self) -> Path:
        """Return the skeleton file to use.

        An explicit ``skeleton_file`` bypasses the registry entirely.
        """
        if self.config.skeleton_file is not None:
            return self.config.skeleton_file.expanduser()

        registry = load_registry(self.config.config_path.expanduser())
        return resolve_definition_path(
            registry, self.config.skeleton, self.config.config_dir
        )

    def load_definition(self) -> SkeletonDefinition:
        """Load the skeleton and reject one that has nothing to do."""
        path = self.locate_definition()
        definition = load_definition(path)
        if definition.is_empty():
            raise ConfigError("Skeleton has nothing to do", path=path)
        self.definition = definition
        return definition

    def build_context(self) -> SubstitutionContext:
        return SubstitutionContext.for_project(
            self.config.name,
            self.config.project_root,
            self.config.config_dir,
        )

    def resolve_tree(self) -> ResolvedTree:
        definition = self.definition or self.load_definition()
        return resolve(definition, self.build_context())

    def build_first(self) -> bool:
        """The CLI flag forces build-first; otherwise the skeleton decides."""
        assert self.definition is not None
        return self.config.build_first or self.definition.build_first

    # ------------------------------------------------------------------
    # Main entry
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute the run and return a summary dict.

        Raises:
            SkelError: Any failure from lookup, parsing, resolution, creation or
                the build script.  Nothing is rolled back.
        """
        definition = self.load_definition()
        tree = self.resolve_tree()
        root = self.config.project_root
        ctx = self.build_context()
        build_first = self.build_first()
        will_build = definition.build is not None and self.config.run_build

        result: dict[str, Any] = {
            "success": False,
            "root": str(root),
            "dry_run": self.config.dry_run,
            "build_ran": False,
            **tree.counts(),
        }

        if tree.templates and not self.config.make_templates:
            print_warning(f"Skipping {len(tree.templates)} template(s)")

        if self.config.dry_run:
            shown = tree
            if not self.config.make_templates:
                shown = ResolvedTree(dirs=tree.dirs, files=tree.files)
            console.print(
                Panel(
                    Text(render_tree(
                        shown,
                        root,
                        build=definition.build if will_build else None,
                        build_first=build_first,
                    )),
                    title="[bold]Dry run[/bold]",
                    border_style="cyan",
                )
            )
            result["success"] = True
            return result

        precheck(root)

        if will_build and build_first:
            await self._build(definition.build, ctx, root)
            result["build_ran"] = True

        create_tree(tree, root, make_templates=self.config.make_templates)

        if will_build and not build_first:
            await self._build(definition.build, ctx, root)
            result["build_ran"] = True

        result["success"] = True
        return result

    async def _build(self, script: str, ctx: SubstitutionContext, root: Path) -> None:
        await run_build(
            script,
            ctx,
            root,
            show_output=self.config.show_build_output,
            timeout=self.config.build_timeout,
        )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def list_skeletons(config_path: Path) -> dict[str, str]:
    """Return ``{name: "alias, alias"}`` for every registered skeleton."""
    registry = load_registry(config_path)
    return {name: ", ".join(aliases) for name, aliases in registry.names()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skel",
        description="skel -- make a project from a skeleton file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  skel rs demo\n"
            "  skel rs demo --root ~/code --dry-run\n"
            "  skel --skeleton-file ./python.toml my-app\n"
        ),
    )

    parser.add_argument(
        "skeleton",
        nargs="?",
        help="Skeleton name or alias from the registry",
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Name of the project to make (default: the skeleton name)",
    )
    parser.add_argument(
        "--skeleton-file", "-s",
        default=None,
        metavar="FILE",
        help="Use FILE as the skeleton instead of looking one up",
    )
    parser.add_argument(
        "--root", "-r",
        default=None,
        metavar="PATH",
        help="Create the project inside PATH instead of the current directory",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        metavar="FILE",
        help="Use FILE as the registry instead of the default location",
    )
    parser.add_argument(
        "--dry-run", "-d",
        action="store_true",
        help="Print what would be made without touching the disk",
    )
    parser.add_argument(
        "--no-build", "-n",
        action="store_true",
        help="Do not run the build script",
    )
    parser.add_argument(
        "--build-first", "-b",
        action="store_true",
        help="Run the build script before making the rest of the project",
    )
    parser.add_argument(
        "--show-build-output", "-o",
        action="store_true",
        help="Show the output of the build script",
    )
    parser.add_argument(
        "--no-templates", "-N",
        action="store_true",
        help="Do not write template files",
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List the registered skeletons and their aliases",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Map parsed CLI arguments onto a :class:`Config`.

    With ``--skeleton-file`` the single positional argument is the project name.
    """
    skeleton = args.skeleton
    name = args.name
    if args.skeleton_file is not None:
        if name is not None:
            raise ConfigError("Cannot use --skeleton-file together with a skeleton name")
        skeleton, name = None, skeleton

    return Config.from_env(
        config_path=Path(args.config) if args.config else None,
        skeleton=skeleton,
        skeleton_file=Path(args.skeleton_file) if args.skeleton_file else None,
        name=name,
        parent_dir=Path(args.root) if args.root else None,
        dry_run=args.dry_run,
        run_build=not args.no_build,
        build_first=args.build_first,
        show_build_output=args.show_build_output,
        make_templates=not args.no_templates,
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``skel``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.list:
            config_path = Path(args.config) if args.config else default_config_path()
            print_summary_table(
                list_skeletons(config_path.expanduser()),
                title="Skeletons",
                columns=("Name", "Aliases"),
            )
            return

        if args.skeleton is None and args.skeleton_file is None:
            parser.error("a skeleton name or --skeleton-file is required")

        config = config_from_args(args)
        result = asyncio.run(Pipeline(config).run())
    except ValidationError as exc:
        print_error(f"Error: invalid arguments\n{exc}")
        sys.exit(1)
    except SkelError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if not result["dry_run"]:
        print_success(f"Made {result['root']}")


if __name__ == "__main__":
    main()
