"""
One-dimensional arena geometry.

The arena is a fixed line of 8 cells indexed 0..7. Nothing may stand
outside it: every position produced by movement, knockback or leap goes
through clamp_position.
"""

CELL_COUNT = 8
MIN_POSITION = 0
MAX_POSITION = CELL_COUNT - 1

# Cards one cell apart are in melee contact
ADJACENT_DISTANCE = 1


def clamp_position(position: int) -> int:
    """Clamp a position to the arena bounds [0, 7]."""
    return max(MIN_POSITION, min(MAX_POSITION, position))


def direction_sign(from_position: int, to_position: int) -> int:
    """
    Direction from one cell to another.

    Returns:
        1 if ``to_position`` is to the right, -1 if to the left, 0 if same cell
    """
    if to_position > from_position:
        return 1
    if to_position < from_position:
        return -1
    return 0


def distance(a: int, b: int) -> int:
    return abs(a - b)


def is_adjacent(a: int, b: int) -> bool:
    return distance(a, b) == ADJACENT_DISTANCE
