from typing import Optional

MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50
MAX_LEADERBOARD_SIZE = 50
DEFAULT_LEADERBOARD_SIZE = 10


def parse_int(value: Optional[str], default: int) -> int:
    """Lenient query int: blanks and junk fall back to ``default``."""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def clamp(value: int, low: int, high: Optional[int] = None) -> int:
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def page_params(page: Optional[str], size: Optional[str]) -> tuple[int, int]:
    """Resolve (page, size) for history listings: page >= 1, 1 <= size <= 200."""
    return (
        clamp(parse_int(page, 1), 1),
        clamp(parse_int(size, DEFAULT_PAGE_SIZE), 1, MAX_PAGE_SIZE),
    )


def leaderboard_size(size: Optional[str]) -> int:
    return clamp(parse_int(size, DEFAULT_LEADERBOARD_SIZE), 1, MAX_LEADERBOARD_SIZE)
