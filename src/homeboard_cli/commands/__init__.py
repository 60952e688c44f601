"""Typer command groups of the Homeboard CLI."""
