"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by the CLI layer.
- Lets the core depend on abstractions instead of typer/rich.
"""
