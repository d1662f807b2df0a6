"""
Coordinate arithmetic for executable positions.

Coordinates address an executable by the sequence of child indices taken from the
process root block. Blocks alternate with executables along the way, so an even
length always addresses a block (the empty sequence is the root block) and an odd
length addresses an executable (an action or a control statement).
"""

Coordinates = tuple[int, ...]

ROOT: Coordinates = ()


def coordinates_equal(a: Coordinates, b: Coordinates) -> bool:
    """Check whether two coordinate sequences address the same position."""
    return tuple(a) == tuple(b)


def coordinates_parent(coordinates: Coordinates) -> Coordinates:
    """
    Get the coordinates of the direct parent position.

    Params:
        coordinates: Non-root coordinates

    Returns:
        The coordinates with the final index removed

    Raises:
        ValueError: If the root coordinates are supplied
    """
    if not coordinates:
        raise ValueError("The root coordinates have no ancestors")
    return tuple(coordinates[:-1])


def coordinates_nth_child(coordinates: Coordinates, n: int) -> Coordinates:
    """Get the coordinates of the n-th child of a position."""
    return (*coordinates, n)


def coordinates_address_block(coordinates: Coordinates) -> bool:
    """Check whether coordinates address a block rather than an executable."""
    return len(coordinates) % 2 == 0


def get_shared_ancestor(a: Coordinates, b: Coordinates) -> Coordinates:
    """
    Find the nearest position that contains both coordinates.

    Params:
        a: First coordinates
        b: Second coordinates

    Returns:
        The longest common prefix of both sequences
    """
    shared = []
    for index_a, index_b in zip(a, b):
        if index_a != index_b:
            break
        shared.append(index_a)
    return tuple(shared)


def is_predecessor(candidate: Coordinates, target: Coordinates) -> bool:
    """
    Determine whether one position executes no later than another.

    Positions are compared at the first index where they diverge. When one
    sequence is a prefix of the other (including equality) the candidate counts
    as a predecessor; the caller decides whether such nesting is legal.

    Params:
        candidate: Coordinates of the possible predecessor
        target: Coordinates of the position being compared against

    Returns:
        True if candidate is reached before, or contains, target
    """
    shared_length = len(get_shared_ancestor(candidate, target))
    if shared_length == len(candidate) or shared_length == len(target):
        return True
    return candidate[shared_length] < target[shared_length]
