"""Utilities for working with QR code matrices."""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple

Coordinate = Tuple[int, int]

FINDER_SIZE = 7


def detect_quiet_zone(matrix: Sequence[Sequence[bool]]) -> int:
    """Return the size of the quiet zone around ``matrix``.

    The quiet zone is the distance from the edge to the first dark module on
    either axis. An all-light matrix has no quiet zone.
    """
    size = len(matrix)
    min_x = size
    min_y = size
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            if value:
                min_x = min(min_x, x)
                min_y = min(min_y, y)
    if min_x == size or min_y == size:
        return 0
    return min(min_x, min_y)


def finder_origins(matrix: Sequence[Sequence[bool]]) -> List[Coordinate]:
    """Return the ``(x, y)`` top-left corners of the three finder patterns.

    Order is top-left, top-right, bottom-left. Matrices too small to hold a
    finder pattern yield an empty list.
    """
    size = len(matrix)
    quiet_zone = detect_quiet_zone(matrix)
    far = size - quiet_zone - FINDER_SIZE
    if far < quiet_zone:
        return []
    return [(quiet_zone, quiet_zone), (far, quiet_zone), (quiet_zone, far)]


def finder_pattern_modules(matrix: Sequence[Sequence[bool]]) -> Set[Coordinate]:
    """Return every coordinate covered by a finder pattern, dark or light.

    Renderers draw finder patterns as whole shapes, so the module loop has to
    skip the full 7x7 block and not just its dark cells.
    """
    covered: Set[Coordinate] = set()
    for origin_x, origin_y in finder_origins(matrix):
        for dy in range(FINDER_SIZE):
            for dx in range(FINDER_SIZE):
                covered.add((origin_x + dx, origin_y + dy))
    return covered


def dark_modules(matrix: Sequence[Sequence[bool]], skip: Set[Coordinate] = frozenset()) -> List[Coordinate]:
    return [
        (x, y)
        for y, row in enumerate(matrix)
        for x, value in enumerate(row)
        if value and (x, y) not in skip
    ]
