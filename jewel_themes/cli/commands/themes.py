from __future__ import annotations

from argparse import Namespace

from ...core.themes import available_themes


def run(args: Namespace) -> int:
    for theme in available_themes():
        tone = "dark" if theme.dark else "light"
        print(f"{theme.name:<14} {theme.identity:<16} {tone:<6} {theme.description}")
    return 0
