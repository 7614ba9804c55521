"""CLI package for the AI Stream Relay

Runs the relay server, or relays a single request straight to the terminal.
"""

from cli.console_sink import ConsoleSink
from cli.main import main

__all__ = [
    "ConsoleSink",
    "main",
]
