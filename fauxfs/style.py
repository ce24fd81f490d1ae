"""ANSI palette for console output.

Colour is purely presentational; ``Palette.plain()`` renders every role as
the unstyled text so output stays readable when piped.
"""

from __future__ import annotations

from dataclasses import dataclass


RULE = "-" * 42


@dataclass(frozen=True)
class Palette:
    banner: str = "\033[1;32m"
    rule: str = "\033[34m"
    warning: str = "\033[1;31m"
    error: str = "\033[31m"
    summary: str = "\033[33m"
    probe: str = "\033[36m"
    reset: str = "\033[0m"

    @classmethod
    def plain(cls) -> "Palette":
        return cls(banner="", rule="", warning="", error="", summary="", probe="", reset="")

    def paint(self, role: str, text: str) -> str:
        code = getattr(self, role)
        if not code:
            return text
        return f"{code}{text}{self.reset}"


def resolve_palette(no_color: bool, is_tty: bool) -> Palette:
    if no_color or not is_tty:
        return Palette.plain()
    return Palette()
