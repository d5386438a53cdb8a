import logging
import time
from pathlib import Path


logger = logging.getLogger(__name__)

PROC_UPTIME = Path("/proc/uptime")

APP_START = time.monotonic()


def format_duration(seconds: float) -> str:
    """Render a duration as e.g. `2days 3h 4m 5s`; zero renders as `0s`."""
    remaining = max(0, int(seconds))
    units = (
        ("days", 86400),
        ("h", 3600),
        ("m", 60),
        ("s", 1),
    )
    parts = []
    for suffix, size in units:
        value, remaining = divmod(remaining, size)
        if value:
            parts.append(f"{value}{suffix}")
    return " ".join(parts) or "0s"


def app_uptime() -> float:
    return time.monotonic() - APP_START


def system_uptime(path: Path = PROC_UPTIME) -> float:
    try:
        raw = path.read_text().split()
        value = float(raw[0])
    except (OSError, IndexError, ValueError) as exc:
        logger.error("Error getting system uptime: %s", exc)
        return 0.0
    if value < 0:
        logger.error("Error getting system uptime: negative value %s", value)
        return 0.0
    return value
