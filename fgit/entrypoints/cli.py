"""fgit CLI entrypoint.

Command-line interface for fgit: refer to changed files by short IDs.
"""

from __future__ import annotations

import functools
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from fgit.domain.config import FgitConfig
    from fgit.domain.entities import FileRecord
    from fgit.ports.vcs import VCS

from fgit.core.editor import open_file_in_editor
from fgit.core.errors import (
    FgitCliError,
    commit_message_required_error,
    repo_not_found_error,
)
from fgit.core.listing import Snapshot, take_snapshot
from fgit.core.picker import Action
from fgit.core.presentation import FgitColors, render_listing
from fgit.core.repo_utils import find_git_root
from fgit.domain.exceptions import FgitDomainError
from fgit.domain.value_objects import CodeAlphabet
from fgit.version import __version__

logger = logging.getLogger(__name__)

COMMAND_ALIASES = {
    "l": "list",
    "d": "diff",
    "sd": "staged-diff",
    "a": "add",
    "e": "edit",
    "v": "edit",
    "c": "commit",
    "p": "push",
    "i": "interactive",
    "w": "watch",
}

# Second word of `f <ID> <action>` -> command
ID_FIRST_ACTIONS = {
    "a": "add",
    "add": "add",
    "d": "diff",
    "diff": "diff",
    "sd": "staged-diff",
    "staged-diff": "staged-diff",
    "e": "edit",
    "v": "edit",
    "edit": "edit",
}


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Domain errors become FgitCliError with their hint; RuntimeError (git
    failures) gets a --verbose hint; anything else is reported as
    unexpected, with a traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (click.ClickException, click.exceptions.Exit, click.Abort):
                # Already user-facing, or an exit code to propagate
                raise
            except FgitDomainError as e:
                raise FgitCliError(e.message, hint=e.hint) from e
            except RuntimeError as e:
                raise FgitCliError(
                    str(e),
                    hint="Run with --verbose for more details",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if (ctx.obj or {}).get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise FgitCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _load_config(repo_root: Path | None) -> FgitConfig:
    """Load merged global/local configuration."""
    from fgit.adapters.factory import ConfigFactory

    return ConfigFactory().create_config_provider().load(repo_root)


def _cached_config(ctx: click.Context, repo_root: Path | None) -> FgitConfig:
    """Load configuration at most once per invocation and work tree."""
    cache = ctx.ensure_object(dict).setdefault("configs", {})
    if repo_root not in cache:
        cache[repo_root] = _load_config(repo_root)
    return cache[repo_root]


def _create_vcs(repo_root: Path) -> VCS:
    """Create the VCS adapter for a work tree."""
    from fgit.adapters.factory import RepositoryFactory

    return RepositoryFactory().create_git_adapter(repo_root)


def get_repo_root() -> Path:
    """Find the enclosing git work tree or fail with a CLI error."""
    repo_root = find_git_root()
    if repo_root is None:
        repo_not_found_error()
    return repo_root


@dataclass
class CommandEnvironment:
    """Everything a command needs: where, how configured, and which VCS."""

    repo_root: Path
    config: FgitConfig
    vcs: VCS
    quiet: bool = False

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.vcs, self.config)

    def echo(self, message: str = "", err: bool = False) -> None:
        click.echo(message, err=err, color=self.config.display.color)


def _environment(ctx: click.Context) -> CommandEnvironment:
    repo_root = get_repo_root()
    config = _cached_config(ctx, repo_root)
    return CommandEnvironment(
        repo_root=repo_root,
        config=config,
        vcs=_create_vcs(repo_root),
        quiet=ctx.obj.get("quiet", False),
    )


def _exit_with(ctx: click.Context, exit_code: int, command: str) -> None:
    """Propagate a git exit code; git has already printed its diagnostics."""
    if exit_code != 0:
        logger.debug("git %s exited with %d", command, exit_code)
        ctx.exit(exit_code)


def run_action(
    ctx: click.Context, env: CommandEnvironment, record: FileRecord, action: Action
) -> None:
    """Run a file action for a resolved record."""
    if action is Action.ADD:
        if not env.quiet:
            env.echo(f"Adding: {record.path}")
        _exit_with(ctx, env.vcs.stage(record), "add")
    elif action is Action.DIFF:
        _exit_with(ctx, env.vcs.show_diff(record), "diff")
    elif action is Action.STAGED_DIFF:
        _exit_with(ctx, env.vcs.show_staged_diff(record), "diff --cached")
    elif action is Action.EDIT:
        open_file_in_editor(
            env.repo_root / record.path,
            record.first_changed_line,
            configured=env.config.editor.command,
        )


def rewrite_id_first(
    args: list[str], alphabet: CodeAlphabet, command_names: set[str]
) -> list[str]:
    """Turn ``<ID> <action> ...`` into ``<command> <ID> ...``.

    Leading options are kept in place. Full command names always win over
    IDs, so ``f add d`` stays "add the file d".
    """
    i = 0
    while i < len(args) and args[i].startswith("-"):
        i += 1
    if i + 1 >= len(args):
        return args

    word, action = args[i], args[i + 1]
    if action not in ID_FIRST_ACTIONS or word in command_names or not alphabet.is_code(word):
        return args
    return args[:i] + [ID_FIRST_ACTIONS[action], word] + args[i + 2 :]


def _id_alphabet(ctx: click.Context) -> CodeAlphabet:
    """Alphabet for recognizing IDs on the command line."""
    try:
        return _cached_config(ctx, find_git_root()).ids.code_alphabet
    except FgitDomainError:
        # Reported properly once the command loads its config
        return CodeAlphabet.default()


class AliasedGroup(click.Group):
    """Click group accepting short aliases and ``f <ID> <action>`` syntax."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in COMMAND_ALIASES:
            command = super().get_command(ctx, COMMAND_ALIASES[cmd_name])
        return command

    def resolve_command(self, ctx: click.Context, args: list[str]):
        _, command, remaining = super().resolve_command(ctx, args)
        return command.name if command else None, command, remaining

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        words = [arg for arg in args if not arg.startswith("-")]
        if len(words) >= 2 and words[1] in ID_FIRST_ACTIONS and words[0] not in self.commands:
            args = rewrite_id_first(args, _id_alphabet(ctx), set(self.commands))
        return super().parse_args(ctx, args)


@click.group(cls=AliasedGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="fgit")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """fgit - short IDs for changed files.

    Every changed file gets a short ID derived from its path, so it stays
    the same across runs. Use it in place of the path:

    \b
      f            list changes with IDs
      f d fk       diff file fk
      f fk a       stage file fk (ID first)
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_files)


@cli.command(name="list")
@click.pass_context
@handle_cli_errors("list")
def list_files(ctx: click.Context) -> None:
    """List changed files with their IDs (alias: l)."""
    env = _environment(ctx)
    snapshot = env.snapshot()
    for line in render_listing(snapshot.entries, env.config.display.syntax_highlighting):
        env.echo(line)


@cli.command()
@click.argument("file_id", required=False)
@click.pass_context
@handle_cli_errors("diff")
def diff(ctx: click.Context, file_id: str | None) -> None:
    """Show the unstaged diff of a file (alias: d).

    Without an ID, diffs the first unstaged or untracked file.
    """
    env = _environment(ctx)
    record = env.snapshot().target(file_id)
    run_action(ctx, env, record, Action.DIFF)


@cli.command(name="staged-diff")
@click.argument("file_id", required=False)
@click.pass_context
@handle_cli_errors("staged-diff")
def staged_diff(ctx: click.Context, file_id: str | None) -> None:
    """Show the staged diff of a file (alias: sd).

    Without an ID, diffs the first file with staged changes.
    """
    env = _environment(ctx)
    record = env.snapshot().target(file_id, staged=True)
    run_action(ctx, env, record, Action.STAGED_DIFF)


@cli.command()
@click.argument("file_id", required=False)
@click.pass_context
@handle_cli_errors("add")
def add(ctx: click.Context, file_id: str | None) -> None:
    """Stage a file (alias: a).

    Without an ID, stages the first unstaged or untracked file.
    """
    env = _environment(ctx)
    record = env.snapshot().target(file_id)
    run_action(ctx, env, record, Action.ADD)


@cli.command()
@click.argument("file_id", required=False)
@click.pass_context
@handle_cli_errors("edit")
def edit(ctx: click.Context, file_id: str | None) -> None:
    """Open a file in your editor at its first change (aliases: e, v)."""
    env = _environment(ctx)
    record = env.snapshot().target(file_id)
    run_action(ctx, env, record, Action.EDIT)


@cli.command()
@click.argument("message", nargs=-1)
@click.pass_context
@handle_cli_errors("commit")
def commit(ctx: click.Context, message: tuple[str, ...]) -> None:
    """Commit staged changes (alias: c). Words are joined into the message."""
    text = " ".join(message).strip()
    if not text:
        commit_message_required_error()
    env = _environment(ctx)
    _exit_with(ctx, env.vcs.commit(text), "commit")


@cli.command()
@click.pass_context
@handle_cli_errors("push")
def push(ctx: click.Context) -> None:
    """Push the current branch (alias: p)."""
    env = _environment(ctx)
    _exit_with(ctx, env.vcs.push(), "push")


@cli.command()
@click.pass_context
@handle_cli_errors("interactive")
def interactive(ctx: click.Context) -> None:
    """Pick a file by typing its ID, then an action (alias: i).

    \b
    Actions: a add, d diff, s staged diff, e edit.
    Esc goes back; q or Ctrl-C quits.
    """
    from fgit.adapters.factory import InterfaceFactory

    env = _environment(ctx)
    snapshot = env.snapshot()
    if snapshot.is_empty:
        env.echo(FgitColors.click_dimmed("No changed files"))
        return

    picker = InterfaceFactory().create_picker(snapshot)
    dispatch = picker.run()
    if dispatch is None:
        return
    run_action(ctx, env, dispatch.record, dispatch.action)


@cli.command()
@click.option(
    "--interval",
    "-i",
    type=float,
    default=None,
    help="Seconds between refreshes (default: [watch] interval, 2).",
)
@click.pass_context
@handle_cli_errors("watch")
def watch(ctx: click.Context, interval: float | None) -> None:
    """Keep the listing on screen, refreshing periodically (alias: w)."""
    from fgit.core.watch import watch_loop

    env = _environment(ctx)
    every = interval if interval is not None else env.config.watch.interval
    if every <= 0:
        raise click.BadParameter("must be positive", param_hint="--interval")

    def refresh() -> None:
        snapshot = env.snapshot()
        click.clear()
        env.echo(
            FgitColors.click_dimmed(f"Every {every:g}s: f list    {time.strftime('%H:%M:%S')}")
        )
        env.echo()
        for line in render_listing(snapshot.entries, env.config.display.syntax_highlighting):
            env.echo(line)

    try:
        watch_loop(refresh, every)
    except KeyboardInterrupt:
        pass


@cli.group()
def config() -> None:
    """Manage fgit configuration files.

    fgit uses a two-tier configuration system:
    - Global: ~/.config/fgit/config.toml (user defaults)
    - Local: <repo>/.fgit.toml (repo-specific settings)

    Local settings override global settings. Missing values use built-in defaults.
    """
    pass


def _config_path(local: bool) -> Path:
    from fgit.shared.config_io import get_global_config_path, get_local_config_path

    if local:
        return get_local_config_path(get_repo_root())
    return get_global_config_path()


def _display_path_status(path: Path, label: str) -> None:
    """Display a config path with its existence status."""
    status = "exists" if path.exists() else "not created"
    color = "green" if path.exists() else "yellow"
    click.echo(f"{label}{path}")
    click.echo(f"  Status: {click.style(status, fg=color)}")


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show configuration file locations and effective settings."""
    from fgit.shared.config_io import (
        dump_config,
        get_global_config_path,
        get_local_config_path,
    )

    repo_root = find_git_root()
    _display_path_status(get_global_config_path(), "Global config: ")
    if repo_root is not None:
        _display_path_status(get_local_config_path(repo_root), "Local config:  ")

    click.echo("\nEffective configuration:\n")
    click.echo(dump_config(_load_config(repo_root)).rstrip())


@config.command(name="init")
@click.option("--local", "-l", is_flag=True, help="Create <repo>/.fgit.toml instead.")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, local: bool, force: bool) -> None:
    """Write a commented default config file (global by default)."""
    from fgit.shared.config_io import create_default_config_file

    path = _config_path(local)
    if path.exists() and not force:
        raise FgitCliError(
            f"Config file already exists: {path}",
            hint="Use --force to overwrite it",
        )
    create_default_config_file(path)
    if not ctx.obj.get("quiet", False):
        click.echo(FgitColors.click_success(f"Created {path}"))


@config.command(name="edit")
@click.option("--local", "-l", is_flag=True, help="Edit <repo>/.fgit.toml instead.")
@click.pass_context
@handle_cli_errors("config edit")
def config_edit(ctx: click.Context, local: bool) -> None:
    """Open a config file in your editor, creating it if needed."""
    from fgit.shared.config_io import create_default_config_file

    path = _config_path(local)
    if not path.exists():
        create_default_config_file(path)
        if not ctx.obj.get("quiet", False):
            click.echo(f"Created {path}")

    configured = _load_config(find_git_root()).editor.command
    open_file_in_editor(path, 1, configured=configured)


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
