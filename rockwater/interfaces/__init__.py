"""Interface layer for Rockwater.

- cli: Typer command-line interface
"""
