"""
Payload extraction from a single event frame.
"""
from typing import Optional

DATA_PREFIX = "data:"


def extract_payload(frame: str, prefix: str = DATA_PREFIX) -> Optional[str]:
    """Return the data-bearing line of a frame, or None if it has none.

    When a frame carries several data lines the last one wins and the earlier
    ones are discarded.
    """
    payload: Optional[str] = None
    for line in frame.split("\n"):
        # Trim CR from Windows-style endings
        if line.endswith("\r"):
            line = line[:-1]
        if not line.startswith(prefix):
            continue
        value = line[len(prefix):]
        if value.startswith(" "):
            value = value[1:]
        payload = value
    return payload
