"""CLI (typer + rich). Formats results; never decides what gets deleted."""
