"""Command-line entrypoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mm_drill.cli.drill import main as drill_main


def __getattr__(name: str):
    if name == "drill_main":
        from mm_drill.cli.drill import main as _main

        return _main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "drill_main",
]
