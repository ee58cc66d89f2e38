"""ANSI 256-color codes for the colored log formatter.

Usage:
    from mustachio.logging.colors import GREEN, colorize

    print(colorize("[RENDER]", GREEN))
"""

RESET = "\033[0m"

# Log levels
LIGHT_BLUE = "\033[38;5;153m"  # DEBUG, structured fields
CYAN = "\033[38;5;51m"  # INFO
YELLOW = "\033[38;5;226m"  # WARNING
RED = "\033[38;5;196m"  # ERROR

# Components
MAGENTA = "\033[38;5;201m"  # parser
GREEN = "\033[38;5;82m"  # render
ORANGE = "\033[38;5;208m"  # config


def colorize(text: str, color: str) -> str:
    """Wrap text in a color code and a reset."""
    return f"{color}{text}{RESET}"


__all__ = [
    "RESET",
    "LIGHT_BLUE",
    "CYAN",
    "YELLOW",
    "RED",
    "MAGENTA",
    "GREEN",
    "ORANGE",
    "colorize",
]
