"""Unit tests for CLI commands against an in-memory VCS."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from fgit.core.listing import Snapshot, take_snapshot
from fgit.core.picker import Action, Dispatch
from fgit.domain.config import FgitConfig
from fgit.domain.exceptions import ConfigurationError
from fgit.domain.value_objects import CodeAlphabet
from fgit.entrypoints.cli import cli, main, rewrite_id_first
from fgit.ports.vcs import RawChange
from tests.conftest import make_hunk
from tests.helpers import (
    FakeVCS,
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_output_contains,
)

COMMANDS = {"list", "diff", "staged-diff", "add", "edit", "commit", "push", "interactive", "watch", "config"}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def vcs() -> FakeVCS:
    return FakeVCS(
        changes=[
            RawChange("src/main.py", " ", "M", 1.0, unstaged_hunks=(make_hunk("-a = 1", "+a = 2", new_start=4),)),
            RawChange("notes.txt", "?", "?", 2.0, unstaged_hunks=(make_hunk("+hello"),)),
            RawChange("README.md", "M", " ", 3.0, staged_hunks=(make_hunk("+docs"),)),
        ]
    )


@pytest.fixture
def env(repo_root: Path, vcs: FakeVCS) -> Iterator[FakeVCS]:
    """Patch repository discovery, config loading and the VCS."""
    with patch("fgit.entrypoints.cli.get_repo_root", return_value=repo_root), patch(
        "fgit.entrypoints.cli._load_config", return_value=FgitConfig.default()
    ), patch("fgit.entrypoints.cli._create_vcs", return_value=vcs):
        yield vcs


def _snapshot(vcs: FakeVCS) -> Snapshot:
    return take_snapshot(FakeVCS(changes=vcs.changes), FgitConfig.default())


def _code(vcs: FakeVCS, path: str) -> str:
    return _snapshot(vcs).assignment.code_for(path)


def _actions(vcs: FakeVCS) -> list[tuple[str, object]]:
    return [call for call in vcs.calls if call[0] != "list_changes"]


class TestList:
    """Tests for the list command."""

    def test_list_shows_groups_and_codes(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["list"])
        assert_command_success(result)
        assert_output_contains(
            result, "── Unstaged ──", "── Untracked ──", "── Staged ──", "src/main.py +1/-1"
        )
        assert f"  {_code(env, 'notes.txt'):<5} notes.txt" in result.output

    def test_inline_diff_shown(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["list"])
        assert "         -a = 1" in result.output
        assert "         +a = 2" in result.output
        # staged entries only show counts
        assert "+docs" not in result.output

    def test_no_arguments_lists(self, runner: CliRunner, env: FakeVCS) -> None:
        assert runner.invoke(cli, []).output == runner.invoke(cli, ["list"]).output

    def test_alias(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["l"])
        assert_command_success(result)
        assert "src/main.py" in result.output

    def test_clean_tree(self, runner: CliRunner, env: FakeVCS) -> None:
        env.changes.clear()
        result = runner.invoke(cli, ["list"])
        assert_command_success(result)
        assert "No changed files" in result.output

    def test_not_in_repository(self, runner: CliRunner) -> None:
        with patch("fgit.entrypoints.cli.find_git_root", return_value=None):
            result = runner.invoke(cli, ["list"])
        assert_command_failed(result)
        assert_error_message(result, hint="git work tree")

    def test_git_failure(self, runner: CliRunner, env: FakeVCS) -> None:
        with patch.object(env, "list_changes", side_effect=RuntimeError("Failed to get git status")):
            result = runner.invoke(cli, ["list"])
        assert_command_failed(result)
        assert_error_message(result, hint="--verbose")

    def test_bad_alphabet_reported(self, runner: CliRunner, repo_root: Path) -> None:
        with patch("fgit.entrypoints.cli.get_repo_root", return_value=repo_root), patch(
            "fgit.entrypoints.cli._load_config",
            side_effect=ConfigurationError("ID alphabet needs at least 2 distinct symbols, got 1"),
        ):
            result = runner.invoke(cli, ["list"])
        assert_command_failed(result)
        assert "at least 2 distinct symbols" in result.output


class TestFileActions:
    """Tests for commands acting on one file."""

    def test_add_by_code(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["add", _code(env, "notes.txt")])
        assert_command_success(result)
        assert "Adding: notes.txt" in result.output
        assert _actions(env) == [("stage", "notes.txt")]

    def test_add_quiet(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["-q", "add", _code(env, "notes.txt")])
        assert_command_success(result)
        assert "Adding" not in result.output

    def test_add_without_code_uses_first_unstaged(self, runner: CliRunner, env: FakeVCS) -> None:
        assert_command_success(runner.invoke(cli, ["a"]))
        assert _actions(env) == [("stage", "src/main.py")]

    def test_diff(self, runner: CliRunner, env: FakeVCS) -> None:
        assert_command_success(runner.invoke(cli, ["diff", _code(env, "src/main.py")]))
        assert _actions(env) == [("show_diff", "src/main.py")]

    def test_staged_diff_defaults_to_staged_file(self, runner: CliRunner, env: FakeVCS) -> None:
        assert_command_success(runner.invoke(cli, ["sd"]))
        assert _actions(env) == [("show_staged_diff", "README.md")]

    def test_unknown_code(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["diff", "zz"])
        assert_command_failed(result)
        assert "No file matches ID: zz" in result.output
        assert_error_message(result, hint="f list")
        assert _actions(env) == []

    def test_ambiguous_code(self, runner: CliRunner, env: FakeVCS) -> None:
        env.changes[:] = [RawChange(f"file{i}.txt", " ", "M") for i in range(20)]
        codes = list(_snapshot(env).assignment)
        shared = next(c[0] for c in codes if sum(o.startswith(c[0]) for o in codes) > 1)
        result = runner.invoke(cli, ["add", shared])
        assert_command_failed(result)
        assert "be more specific" in result.output
        assert_error_message(result, hint="Candidates:")
        assert _actions(env) == []

    def test_no_staged_changes(self, runner: CliRunner, env: FakeVCS) -> None:
        env.changes[:] = [RawChange("a.py", " ", "M")]
        result = runner.invoke(cli, ["staged-diff"])
        assert_command_failed(result)
        assert_error_message(result, hint="f add")

    def test_git_exit_code_propagates(self, runner: CliRunner, env: FakeVCS) -> None:
        env.exit_code = 128
        result = runner.invoke(cli, ["add", _code(env, "notes.txt")])
        assert result.exit_code == 128

    def test_edit_opens_first_changed_line(
        self, runner: CliRunner, env: FakeVCS, repo_root: Path
    ) -> None:
        with patch("fgit.entrypoints.cli.open_file_in_editor") as mock_open:
            result = runner.invoke(cli, ["e", _code(env, "src/main.py")])
        assert_command_success(result)
        mock_open.assert_called_once_with(repo_root / "src/main.py", 4, configured="vim")

    def test_v_alias_edits(self, runner: CliRunner, env: FakeVCS) -> None:
        with patch("fgit.entrypoints.cli.open_file_in_editor") as mock_open:
            assert_command_success(runner.invoke(cli, ["v", _code(env, "notes.txt")]))
        assert mock_open.call_args.args[1] == 1


class TestIdFirstSyntax:
    """Tests for `f <ID> <action>`."""

    def test_id_then_action(self, runner: CliRunner, env: FakeVCS) -> None:
        with patch("fgit.entrypoints.cli._id_alphabet", return_value=CodeAlphabet.default()):
            result = runner.invoke(cli, [_code(env, "notes.txt"), "a"])
        assert_command_success(result)
        assert _actions(env) == [("stage", "notes.txt")]

    def test_id_then_long_action(self, runner: CliRunner, env: FakeVCS) -> None:
        with patch("fgit.entrypoints.cli._id_alphabet", return_value=CodeAlphabet.default()):
            result = runner.invoke(cli, [_code(env, "README.md"), "staged-diff"])
        assert_command_success(result)
        assert _actions(env) == [("show_staged_diff", "README.md")]

    def test_config_loaded_once(self, runner: CliRunner, repo_root: Path, vcs: FakeVCS) -> None:
        """Recognizing the ID and running the command share one config load."""
        load = MagicMock(return_value=FgitConfig.default())
        with patch("fgit.entrypoints.cli.find_git_root", return_value=repo_root), patch(
            "fgit.entrypoints.cli.get_repo_root", return_value=repo_root
        ), patch("fgit.entrypoints.cli._load_config", load), patch(
            "fgit.entrypoints.cli._create_vcs", return_value=vcs
        ):
            result = runner.invoke(cli, [_code(vcs, "notes.txt"), "a"])
        assert_command_success(result)
        assert _actions(vcs) == [("stage", "notes.txt")]
        load.assert_called_once_with(repo_root)

    def test_rewrite(self) -> None:
        alphabet = CodeAlphabet.default()
        assert rewrite_id_first(["fk", "a"], alphabet, COMMANDS) == ["add", "fk"]
        assert rewrite_id_first(["-q", "fk", "sd"], alphabet, COMMANDS) == ["-q", "staged-diff", "fk"]

    def test_command_names_win(self) -> None:
        """`f add d` stages the file with ID d."""
        alphabet = CodeAlphabet.default()
        assert rewrite_id_first(["add", "d"], alphabet, COMMANDS) == ["add", "d"]

    def test_alias_letters_read_as_ids(self) -> None:
        """`f d a` is "add file d", not "diff file a"."""
        alphabet = CodeAlphabet.default()
        assert rewrite_id_first(["d", "a"], alphabet, COMMANDS) == ["add", "d"]

    def test_non_codes_untouched(self) -> None:
        alphabet = CodeAlphabet.default()
        assert rewrite_id_first(["README.md", "a"], alphabet, COMMANDS) == ["README.md", "a"]
        assert rewrite_id_first(["fk", "commit"], alphabet, COMMANDS) == ["fk", "commit"]
        assert rewrite_id_first(["fk"], alphabet, COMMANDS) == ["fk"]


class TestCommitAndPush:
    """Tests for repository-wide git actions."""

    def test_commit_joins_words(self, runner: CliRunner, env: FakeVCS) -> None:
        assert_command_success(runner.invoke(cli, ["c", "fix", "the", "bug"]))
        assert _actions(env) == [("commit", "fix the bug")]

    def test_commit_requires_message(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["commit"])
        assert_command_failed(result)
        assert "Commit message required" in result.output
        assert_error_message(result, hint="f commit <message>")
        assert _actions(env) == []

    def test_push(self, runner: CliRunner, env: FakeVCS) -> None:
        assert_command_success(runner.invoke(cli, ["p"]))
        assert _actions(env) == [("push", None)]

    def test_push_failure_exit_code(self, runner: CliRunner, env: FakeVCS) -> None:
        env.exit_code = 1
        assert runner.invoke(cli, ["push"]).exit_code == 1


class TestInteractive:
    """Tests for the interactive command."""

    def test_dispatches_picked_action(self, runner: CliRunner, env: FakeVCS) -> None:
        record = _snapshot(env).resolve(_code(env, "notes.txt"))
        picker = MagicMock()
        picker.run.return_value = Dispatch(record, Action.ADD)
        with patch("fgit.adapters.factory.InterfaceFactory.create_picker", return_value=picker):
            result = runner.invoke(cli, ["i"])
        assert_command_success(result)
        assert _actions(env) == [("stage", "notes.txt")]

    def test_quit_does_nothing(self, runner: CliRunner, env: FakeVCS) -> None:
        picker = MagicMock()
        picker.run.return_value = None
        with patch("fgit.adapters.factory.InterfaceFactory.create_picker", return_value=picker):
            assert_command_success(runner.invoke(cli, ["interactive"]))
        assert _actions(env) == []

    def test_clean_tree_skips_picker(self, runner: CliRunner, env: FakeVCS) -> None:
        env.changes.clear()
        with patch("fgit.adapters.factory.InterfaceFactory.create_picker") as mock_create:
            result = runner.invoke(cli, ["interactive"])
        assert_command_success(result)
        assert "No changed files" in result.output
        mock_create.assert_not_called()


class TestWatch:
    """Tests for the watch command."""

    def test_refresh_renders_listing(self, runner: CliRunner, env: FakeVCS) -> None:
        def fake_loop(refresh, interval):
            refresh()
            raise KeyboardInterrupt

        with patch("fgit.core.watch.watch_loop", side_effect=fake_loop) as mock_loop:
            result = runner.invoke(cli, ["w", "--interval", "0.5"])
        assert_command_success(result)
        assert mock_loop.call_args.args[1] == 0.5
        assert_output_contains(result, "Every 0.5s", "src/main.py")

    def test_interval_defaults_to_config(self, runner: CliRunner, env: FakeVCS) -> None:
        with patch("fgit.core.watch.watch_loop", return_value=0) as mock_loop:
            assert_command_success(runner.invoke(cli, ["watch"]))
        assert mock_loop.call_args.args[1] == 2.0

    def test_non_positive_interval(self, runner: CliRunner, env: FakeVCS) -> None:
        result = runner.invoke(cli, ["watch", "-i", "0"])
        assert result.exit_code == 2
        assert "must be positive" in result.output


class TestConfigCommands:
    """Tests for the config command group."""

    def test_init_creates_global_file(self, runner: CliRunner, isolated_environment: Path) -> None:
        result = runner.invoke(cli, ["config", "init"])
        assert_command_success(result)
        assert (isolated_environment / "fgit" / "config.toml").exists()

    def test_init_refuses_to_overwrite(self, runner: CliRunner) -> None:
        runner.invoke(cli, ["config", "init"])
        result = runner.invoke(cli, ["config", "init"])
        assert_command_failed(result)
        assert_error_message(result, hint="--force")
        assert_command_success(runner.invoke(cli, ["config", "init", "--force"]))

    def test_init_local(self, runner: CliRunner, repo_root: Path) -> None:
        with patch("fgit.entrypoints.cli.get_repo_root", return_value=repo_root):
            assert_command_success(runner.invoke(cli, ["config", "init", "--local"]))
        assert (repo_root / ".fgit.toml").exists()

    def test_show(self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with patch("fgit.entrypoints.cli.find_git_root", return_value=None):
            result = runner.invoke(cli, ["config", "show"])
        assert_command_success(result)
        assert_output_contains(result, "Global config:", "not created", 'alphabet = "dfghklsa"')

    def test_edit_creates_and_opens(self, runner: CliRunner, isolated_environment: Path) -> None:
        with patch("fgit.entrypoints.cli.find_git_root", return_value=None), patch(
            "fgit.entrypoints.cli.open_file_in_editor"
        ) as mock_open:
            result = runner.invoke(cli, ["config", "edit"])
        assert_command_success(result)
        path = isolated_environment / "fgit" / "config.toml"
        assert path.exists()
        mock_open.assert_called_once_with(path, 1, configured="vim")


class TestMain:
    """Tests for the main() entrypoint."""

    def test_returns_one_on_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.argv", ["f", "commit"])
        with patch("fgit.entrypoints.cli.cli", side_effect=RuntimeError("boom")):
            assert main() == 1
