"""newtkit CLI entry point.

Defines the top-level ``newtkit`` command (via Click-Extra). Its options
feed `newtkit.logging.init`, which sets the log level, the optional log file
tee and the status-message verbosity before any subcommand runs.

Examples
    $ newtkit -v sh 'make -C build'
    $ newtkit --log-level DEBUG --log-file newt.log dirs . pkgs --full-path
    $ newtkit exec /usr/bin/gdb ./app.elf
"""

import logging
from pathlib import Path

import click
import click_extra as clickx

from newtkit import __version__
from newtkit.errors import NewtError
from newtkit.logging import DEFAULT_LEVEL, LEVELS, init
from newtkit.messages import Verbosity

from .commands import config_cmd, dirs, exec_cmd, fields, lines, sh

logger = logging.getLogger(__name__)


HELP = """newtkit command-line interface.

    Run shell and interactive commands, search package trees, and inspect
    manifest and YAML files with the same helpers build tooling uses.
    """


def effective_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Apply -v/-q repetitions to the default verbosity, clamped to the valid range."""
    level = Verbosity.DEFAULT + verbose_count - quiet_count
    return max(Verbosity.SILENT, min(Verbosity.VERBOSE, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Print more status output; repeat for more.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Print less status output; repeat for less.",
    default=0,
)
@click.option(
    "--log-level",
    type=click.Choice(list(LEVELS), case_sensitive=False),
    default=DEFAULT_LEVEL,
    envvar="NEWTKIT_LOG_LEVEL",
    show_default=True,
    show_envvar=True,
    help="Minimum level of log records to emit.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="NEWTKIT_LOG_FILE",
    show_envvar=True,
    help="Also write log records to this file (truncated on start).",
)
@clickx.pass_context
def newtkit(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    log_level: str,
    log_file: Path | None,
) -> None:
    """newtkit command-line interface."""

    verbosity = effective_verbosity(verbose_count, quiet_count)
    use_color = ctx.color is not False  # None or True => allow color
    try:
        init(log_level, verbosity, log_file, color=use_color)
    except NewtError as e:
        raise click.ClickException(e.text) from e

    logger.debug(
        "newtkit %s: level=%s, verbosity=%s, log_file=%s",
        __version__,
        log_level,
        Verbosity(verbosity).name,
        log_file or "<none>",
    )

    ctx.call_on_close(logging.shutdown)


newtkit.add_command(sh)
newtkit.add_command(exec_cmd)
newtkit.add_command(lines)
newtkit.add_command(dirs)
newtkit.add_command(fields)
newtkit.add_command(config_cmd)
