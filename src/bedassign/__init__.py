"""
Command-line entry point for the hospital bed assignment engine.
"""

from .cli import app


def main() -> None:
    # Delegate to Typer app so `bedassign ...` works.
    app()
