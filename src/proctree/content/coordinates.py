"""
Coordinates of stored content.

Bridges the pure coordinate arithmetic in proctree.core.coordinates and the
content store: computing the position of any node, and finding the executable
at a position.
"""

from proctree.content.nodes import Action, Block, Content, Control, Process
from proctree.content.store import ContentStore
from proctree.core.coordinates import Coordinates
from proctree.core.types import ContentKey


def find_coordinates(store: ContentStore, key: ContentKey) -> Coordinates:
    """
    Compute the position of a node.

    Only executables and blocks contribute an index, so every node inside an
    action (arguments, expressions, the output variable) shares that action's
    coordinates. Nodes owned directly by the process (its inputs and return
    argument) are at the root.

    Params:
        store: Content store holding the node
        key: Any content key

    Returns:
        Child indices from the root block down to the nearest executable ancestor
    """
    positional: list[Action | Block | Control] = [
        content
        for content in store.walk_up(key)
        if isinstance(content, (Action, Block, Control))
    ]
    coordinates: list[int] = []
    for child, parent in zip(positional, positional[1:]):
        # Only blocks and controls can hold positional children
        coordinates.append(parent.child_keys.index(child.key))
    return tuple(reversed(coordinates))


def find_executable(
    store: ContentStore, coordinates: Coordinates
) -> Process | Action | Control | Block | None:
    """
    Find the node addressed by coordinates.

    Params:
        store: Content store holding the tree
        coordinates: Child indices from the root block

    Returns:
        The process for empty coordinates, otherwise the block or executable at the
        position, or None if the coordinates do not address anything
    """
    process = store.root
    if not coordinates:
        return process
    pointer: Content = store.resolve(process.root_block_key, Block)
    for index in coordinates:
        if not isinstance(pointer, (Block, Control)):
            return None
        if not 0 <= index < len(pointer.child_keys):
            return None
        pointer = store.resolve(pointer.child_keys[index])
    return pointer
