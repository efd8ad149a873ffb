"""
Common utilities for Pogoda weather service.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


def parseDelay(delayStr: Union[str, int, float]) -> int:
    """
    Parse delay string to integer seconds.

    Args:
        delayStr: Number of seconds or string in one of formats:
            1. `DDdHHhMMmSSs` (e.g., "1d2h30m15s") - each section is optional but at least one must be present
            2. `HH:MM[:SS]` (e.g., "2:30" or "2:30:15")

    Returns:
        Total delay in seconds as integer.

    Raises:
        ValueError: If the string doesn't match any supported format.
    """
    if isinstance(delayStr, (int, float)) and not isinstance(delayStr, bool):
        if delayStr < 0:
            raise ValueError(f"Delay can't be negative: {delayStr}")
        return int(delayStr)

    delayStr = str(delayStr).strip()
    if delayStr.isdigit():
        return int(delayStr)

    # Format 1: DDdHHhMMmSSs
    if any(c in delayStr for c in ["d", "h", "m", "s"]):
        try:
            totalSeconds = 0
            remaining = delayStr
            for suffix, multiplier in (("d", 24 * 3600), ("h", 3600), ("m", 60), ("s", 1)):
                if suffix in remaining:
                    idx = remaining.index(suffix)
                    totalSeconds += int(remaining[:idx]) * multiplier
                    remaining = remaining[idx + 1 :]

            if remaining == "":
                return totalSeconds

        except (ValueError, IndexError):
            pass  # Will try next format

    # Format 2: HH:MM[:SS]
    timeParts = delayStr.split(":")
    if 2 <= len(timeParts) <= 3:
        try:
            hours = int(timeParts[0])
            minutes = int(timeParts[1])
            seconds = int(timeParts[2]) if len(timeParts) == 3 else 0

            if 0 <= minutes < 60 and 0 <= seconds < 60:
                return hours * 3600 + minutes * 60 + seconds

        except ValueError:
            pass  # Will raise ValueError at end

    raise ValueError(f"Invalid delay format: {delayStr}. Expected formats: '[DDd][HHh][MMm][SSs]' or 'HH:MM[:SS]'")


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # If indent is passed, then user want pretty-printed JSON,
        #  no need to use compact separators
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Read file line by line and put key-value pairs into dictionary.
    Empty lines and lines starting with # are skipped.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True)

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    with open(path, "rt") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ[k] = v
    return ret
