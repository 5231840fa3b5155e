"""Command line entry point.

The typer app lives in ``gridtac.cli.main``; it is imported on first call so
``import gridtac.cli`` stays cheap.
"""


def run() -> None:
    """Console script target: ``gridtac play``, ``gridtac watch``, ``gridtac dashboard``."""
    from .main import app

    app(prog_name="gridtac")


__all__ = ["run"]
