from typing import Optional
import time


def now_seconds() -> float:
    return time.time()



def format_seconds(s: float) -> str:
    if s < 0:
        s = 0
    mins = int(s) // 60
    secs = s - mins * 60
    return f"{mins:02d}:{secs:05.2f}"


def format_space(space) -> str:
    if space is None:
        return "pass"
    return f"({space.x},{space.y})"


def parse_coordinates(text: str) -> Optional[tuple]:
    #Parse "x y" or "x,y" into a coordinate pair. Returns None if malformed.
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None
