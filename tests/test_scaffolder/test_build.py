"""Tests for the build-script step (skel.scaffolder.build)."""

from __future__ import annotations

import shutil
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from skel.errors import BuildError
from skel.scaffolder.build import BUILD_SHEBANG, build_cwd, make_build_script, run_build
from skel.templating import SubstitutionContext


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path / "demo"


@pytest.fixture
def ctx(root: Path, tmp_path: Path) -> SubstitutionContext:
    return SubstitutionContext.for_project("demo", root, tmp_path / "cfg")


class TestMakeBuildScript:
    @pytest.mark.unit
    def test_shebang_and_substitution(self, ctx, root):
        script = make_build_script("cd {{root}}\necho {{name}}", ctx)
        assert script == f"{BUILD_SHEBANG}cd {root}\necho demo"


class TestBuildCwd:
    @pytest.mark.unit
    def test_root_when_it_exists(self, root):
        root.mkdir()
        assert build_cwd(root) == root

    @pytest.mark.unit
    def test_parent_when_root_missing(self, root):
        assert build_cwd(root) == root.parent

    @pytest.mark.unit
    def test_none_when_nothing_exists(self, tmp_path):
        assert build_cwd(tmp_path / "a" / "b") is None


class TestRunBuildMocked:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_passes_bash_command(self, ctx, root):
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("skel.scaffolder.build.run_command", mock_run):
            await run_build("make", ctx, root, timeout=30)

        mock_run.assert_awaited_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["bash", "-c", f"{BUILD_SHEBANG}make"]
        assert kwargs["cwd"] == root.parent
        assert kwargs["timeout"] == 30
        assert kwargs["capture"] is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_show_output_disables_capture(self, ctx, root):
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("skel.scaffolder.build.run_command", mock_run):
            await run_build("make", ctx, root, show_output=True)
        assert mock_run.call_args.kwargs["capture"] is False

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_raises(self, ctx, root):
        mock_run = AsyncMock(return_value=(2, "", "boom"))
        with patch("skel.scaffolder.build.run_command", mock_run):
            with pytest.raises(BuildError) as exc_info:
                await run_build("false", ctx, root)
        assert exc_info.value.returncode == 2
        assert exc_info.value.stderr == "boom"
        assert "exit 2" in str(exc_info.value)


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")
class TestRunBuildReal:
    @pytest.mark.asyncio
    async def test_build_first_creates_root(self, ctx, root):
        await run_build("mkdir {{name}} && touch {{name}}/built", ctx, root)
        assert (root / "built").is_file()

    @pytest.mark.asyncio
    async def test_runs_inside_existing_root(self, ctx, root):
        root.mkdir()
        await run_build('echo "$PWD" > where.txt', ctx, root)
        assert Path((root / "where.txt").read_text().strip()).resolve() == root.resolve()

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, ctx, root):
        with pytest.raises(BuildError) as exc_info:
            await run_build("echo bad >&2; exit 3", ctx, root)
        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr == "bad"
