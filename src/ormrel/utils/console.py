"""
Rich consoles shared by the command line interface
"""

import os

from rich.console import Console


def get_console(stderr: bool = False) -> Console:
    """Configuration minimaliste qui marche partout"""
    if os.name == "nt":
        return Console(stderr=stderr, legacy_windows=True, safe_box=True)
    return Console(stderr=stderr)


# Tables and summaries; generated Rel is written to stdout with click.echo
console = get_console(stderr=True)
