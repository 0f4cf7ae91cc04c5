"""skel run configuration.

One typed object describing a single run: where the registry lives, which
skeleton to use, where to create the project and which switches are on.  It is
built once by the CLI (``Config.from_env`` is the only place that reads the
environment) and then handed to the pipeline, so the core never looks at
ambient state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

CONFIG_ENV_VAR = "SKEL_CONFIG"
CONFIG_FILE_NAME = "config.toml"
APP_DIR_NAME = "skel"


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Work out the registry location from an environment mapping.

    Order: ``$SKEL_CONFIG``, then ``$XDG_CONFIG_HOME/skel/config.toml``, then
    ``$HOME/.config/skel/config.toml``.
    """
    env = os.environ if environ is None else environ

    if env.get(CONFIG_ENV_VAR):
        return Path(env[CONFIG_ENV_VAR]).expanduser()

    if env.get("XDG_CONFIG_HOME"):
        base = Path(env["XDG_CONFIG_HOME"])
    elif env.get("HOME"):
        base = Path(env["HOME"]) / ".config"
    else:
        base = Path.home() / ".config"

    return base / APP_DIR_NAME / CONFIG_FILE_NAME


class Config(BaseModel):
    """Everything a single skel run needs to know.

    Either ``skeleton`` (a registry name or alias) or ``skeleton_file`` must be
    given.  ``name`` falls back to ``skeleton`` when omitted.
    """

    config_path: Path = Field(default_factory=default_config_path)
    skeleton: str | None = Field(default=None, description="Skeleton name or alias")
    skeleton_file: Path | None = Field(
        default=None, description="Skeleton definition used instead of a registry lookup"
    )
    name: str = Field(default="", description="Name of the project to create")
    parent_dir: Path | None = Field(
        default=None, description="Directory the project is created in (default: cwd)"
    )

    dry_run: bool = False
    run_build: bool = True
    build_first: bool = Field(default=False, description="Force the build script to run first")
    show_build_output: bool = False
    make_templates: bool = True
    build_timeout: int = Field(default=600, ge=1, description="Build script timeout in seconds")

    @model_validator(mode="after")
    def _check_target(self) -> "Config":
        if self.skeleton is None and self.skeleton_file is None:
            raise ValueError("either a skeleton name or a skeleton file is required")
        if not self.name:
            if self.skeleton is None:
                raise ValueError("a project name is required with a skeleton file")
            self.name = self.skeleton
        return self

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def config_dir(self) -> Path:
        """Directory holding the registry; fills the ``{{config-dir}}`` slot."""
        return self.config_path.expanduser().absolute().parent

    @property
    def project_root(self) -> Path:
        """Absolute path of the project to create."""
        parent = self.parent_dir.expanduser() if self.parent_dir else Path.cwd()
        return (parent / self.name).absolute()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "Config":
        """Build a ``Config`` from the environment plus explicit overrides.

        ``config_path`` is looked up with :func:`default_config_path` unless it
        is passed in *overrides* (e.g. from ``--config``).  Overrides whose
        value is ``None`` are ignored so CLI defaults fall through.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        values.setdefault("config_path", default_config_path(environ))
        return cls(**values)
