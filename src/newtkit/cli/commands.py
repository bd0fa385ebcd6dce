"""newtkit subcommands.

Thin wrappers that expose the library helpers on the command line. Results
go to **stdout**; notices and failures go to **stderr** so output stays
pipeable. A `NewtError` is reported by its message; the captured stack
trace is only printed at VERBOSE verbosity.
"""

from __future__ import annotations

from pathlib import Path

import click

from newtkit.config import load_yaml_config
from newtkit.errors import CommandError, NewtError, ReadLinesError
from newtkit.fs import descendant_dirs_of_parent
from newtkit.messages import Verbosity, error_message, status_message
from newtkit.shell import run_interactive_command, run_shell_command
from newtkit.text import read_lines, sort_fields

from .helpers import error, warn


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a process exit status.

    A child killed by signal N has ``returncode == -N``; shells report that
    as ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def report(err: NewtError) -> None:
    """Show ``err`` on stderr, with its stack trace when running verbose."""
    error(err.text)
    if err.stack_trace:
        error_message(Verbosity.VERBOSE, "%s\n", err.stack_trace)


@click.command()
@click.argument("cmd")
@click.pass_context
def sh(ctx: click.Context, cmd: str) -> None:
    """Run CMD with `sh -c` and print its combined output."""
    status_message(Verbosity.VERBOSE, "Executing: %s\n", cmd)
    try:
        output = run_shell_command(cmd)
    except CommandError as e:
        click.echo(e.output, nl=False)
        report(e)
        ctx.exit(1 if e.returncode is None else exit_status(e.returncode))
    click.echo(output, nl=False)


@click.command(
    "exec",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("argv", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def exec_cmd(ctx: click.Context, argv: tuple[str, ...]) -> None:
    """Run ARGV attached to this terminal; Ctrl-C goes to the child."""
    try:
        returncode = run_interactive_command(argv)
    except NewtError as e:
        report(e)
        ctx.exit(1)
    if returncode != 0:
        warn(f"{argv[0]} exited with status {returncode}")
    ctx.exit(exit_status(returncode))


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def lines(ctx: click.Context, path: Path) -> None:
    """Print PATH's logical lines, joining backslash continuations."""
    try:
        result = read_lines(path)
    except ReadLinesError as e:
        for line in e.lines:
            click.echo(line)
        report(e)
        ctx.exit(1)
    except NewtError as e:
        report(e)
        ctx.exit(1)
    for line in result:
        click.echo(line)


@click.command()
@click.argument("root", type=click.Path(path_type=Path))
@click.argument("parent")
@click.option(
    "--full-path/--name-only",
    default=False,
    show_default=True,
    help="Print each directory as a path under ROOT instead of a bare name.",
)
@click.pass_context
def dirs(ctx: click.Context, root: Path, parent: str, full_path: bool) -> None:
    """Print the child directories of every directory named PARENT under ROOT."""
    try:
        found = descendant_dirs_of_parent(root, parent, full_path)
    except NewtError as e:
        report(e)
        ctx.exit(1)
    status_message(Verbosity.VERBOSE, "Found %d directories\n", len(found))
    for d in found:
        click.echo(d)


@click.command()
@click.argument("strings", nargs=-1)
def fields(strings: tuple[str, ...]) -> None:
    """Print the unique whitespace-separated tokens of STRINGS, sorted."""
    for token in sort_fields(*strings):
        click.echo(token)


@click.command("config")
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path))
@click.argument("name")
@click.argument("keys", nargs=-1)
@click.pass_context
def config_cmd(
    ctx: click.Context, directory: Path, name: str, keys: tuple[str, ...]
) -> None:
    """Print KEYS (dotted, case-insensitive) from DIRECTORY/NAME.yml.

    With no KEYS, print the top-level keys.
    """
    try:
        cfg = load_yaml_config(directory, name)
    except NewtError as e:
        report(e)
        ctx.exit(1)
    status_message(Verbosity.VERBOSE, "Loaded %s\n", cfg.config_file)
    if not keys:
        for key in cfg.all_settings():
            click.echo(key)
        return
    for key in keys:
        value = cfg.get(key)
        if isinstance(value, list):
            click.echo(f"{key}={' '.join(cfg.get_string_list(key))}")
        else:
            click.echo(f"{key}={cfg.get_string(key)}")
