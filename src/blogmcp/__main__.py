"""``python -m blogmcp`` runs the bridge CLI."""

from blogmcp.cli import run

run()
