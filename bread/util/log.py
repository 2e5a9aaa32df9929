import sys

from bread.config import LOG_LEVEL


COLORS = {
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "magenta": "\033[35m",
    "reset": "\033[0m",
}

LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
}

_threshold = LEVELS.get(LOG_LEVEL.lower(), LEVELS["info"])


def set_level(level: str):
    """
    Change the minimum level printed at runtime (debug, info, warn, error).
    """
    global _threshold
    if level.lower() not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    _threshold = LEVELS[level.lower()]


def _supports_color() -> bool:
    return sys.stdout.isatty()


def colorize(message: str, color: str) -> str:
    if not _supports_color():
        return message
    code = COLORS.get(color, "")
    reset = COLORS["reset"] if code else ""
    return f"{code}{message}{reset}"


def log(message: str, color: str = "reset", level: str = "info"):
    if LEVELS[level] < _threshold:
        return
    stream = sys.stderr if level == "error" else sys.stdout
    print(colorize(message, color), file=stream)


def log_info(message: str):
    log(message, "cyan", "info")


def log_success(message: str):
    log(message, "green", "info")


def log_warn(message: str):
    log(message, "yellow", "warn")


def log_error(message: str):
    log(message, "red", "error")


def log_debug(message: str):
    log(message, "magenta", "debug")
