"""Map an opaque external token (e.g. a commit hash) to an opening move."""
from .engine import Position


def position_from_token(token: str) -> Position:
    """Sum the token's hex digit values, reduce mod 9, decode row-major.

    >>> position_from_token("a1")
    Position(row=0, column=2)
    """
    total = 0
    for c in token.strip():
        try:
            total += int(c, 16)
        except ValueError:
            raise ValueError(f"Token must be hexadecimal, got {c!r} in {token!r}") from None
    return Position.from_index(total % 9)
