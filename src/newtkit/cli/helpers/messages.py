"""Terminal notices for the newtkit CLI.

Each notice is one bold, colored line on **stderr**, prefixed with an emoji
glyph when the terminal can encode it and an ASCII stand-in otherwise. Stdout
is left alone so command output stays pipeable.
"""

import click

CAUTION = ("⚠️", "[!]")
FAILURE = ("❌", "[X]")


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr.

    Click's stderr stream is looked up on every call, since tests and
    redirections may swap it between calls.
    """
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(pair: tuple[str, str]) -> str:
    emoji, fallback = pair
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """Return "⚠️", or "[!]" on terminals that cannot show it."""
    return _glyph(CAUTION)


def error_glyph() -> str:
    """Return "❌", or "[X]" on terminals that cannot show it."""
    return _glyph(FAILURE)


def warn(msg: str) -> None:
    """Emit a yellow warning line to stderr, e.g. ``⚠️  Command exited 1.``"""
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red error line to stderr, e.g. ``❌  Cannot open pkg.yml.``"""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
