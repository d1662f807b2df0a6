"""
Key-indexed arena of content nodes.

The store exclusively owns every node of one process tree. Parent and child links
are keys, so walking the tree always goes through the store. Walks are iterative
to stay clear of recursion limits on deep trees.
"""

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from proctree.content.nodes import (
    Action,
    Argument,
    Block,
    Content,
    Control,
    Function,
    Process,
    Reference,
    Value,
    Variable,
)
from proctree.core.types import ContentKey
from proctree.exceptions import ContentKindError, ContentNotFoundError, ReorderError

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Content)


def child_keys_of(content: Content) -> list[ContentKey]:
    """
    List the keys a node owns, in document order.

    Params:
        content: Any content node

    Returns:
        Owned child keys; references to variables are not ownership and are excluded
    """
    match content:
        case Process():
            keys = list(content.input_variable_keys)
            if content.root_block_key is not None:
                keys.append(content.root_block_key)
            keys.extend(content.child_key_map.values())
            return keys
        case Block() | Argument():
            return list(content.child_keys)
        case Control():
            return [*content.child_key_map.values(), *content.child_keys]
        case Action():
            keys = list(content.child_key_map.values())
            if content.variable_key is not None:
                keys.append(content.variable_key)
            return keys
        case Function():
            return list(content.child_key_map.values())
        case Value() | Reference() | Variable():
            return []
        case _:
            raise TypeError(f"Unknown content variant: {type(content).__name__}")


class ContentStore:
    """Arena of content nodes addressed by generated keys."""

    def __init__(self, key_prefix: str = ""):
        self.key_prefix = key_prefix
        self.count = 0
        self.contents: dict[ContentKey, Content] = {}
        self.root_key: ContentKey | None = None

    def __contains__(self, key: object) -> bool:
        return key in self.contents

    def __len__(self) -> int:
        return len(self.contents)

    def next_key(self) -> ContentKey:
        """Allocate a fresh key; keys are never reused within one store."""
        key = f"{self.key_prefix}{self.count}"
        self.count += 1
        return key

    def add(self, content: C) -> C:
        self.contents[content.key] = content
        return content

    def get(self, key: ContentKey | None) -> Content | None:
        if key is None:
            return None
        return self.contents.get(key)

    def resolve(self, key: ContentKey | None, *kinds: type[C]) -> C:
        """
        Look up a node and check its variant.

        Params:
            key: Content key
            *kinds: Accepted variants; any variant is accepted when none are given

        Returns:
            The stored node

        Raises:
            ContentNotFoundError: If the key does not exist
            ContentKindError: If the node is not one of the accepted variants
        """
        content = self.get(key)
        if content is None:
            raise ContentNotFoundError(str(key))
        if kinds and not isinstance(content, kinds):
            raise ContentKindError(
                content.key, content.kind.value, [kind.kind.value for kind in kinds]
            )
        return content

    @property
    def root(self) -> Process:
        return self.resolve(self.root_key, Process)

    def walk_up(self, key: ContentKey, include_self: bool = True) -> Iterator[Content]:
        """Yield a node's ancestors from the nearest up to the root."""
        content = self.resolve(key)
        if not include_self:
            content = self.get(content.parent_key)
        while content is not None:
            yield content
            content = self.get(content.parent_key)

    def walk_down(self, key: ContentKey, post_order: bool = False) -> Iterator[Content]:
        """
        Yield a node and all its owned descendants.

        Params:
            key: Subtree root
            post_order: Yield children before their parent instead of after

        Returns:
            Iterator over the subtree in document order (pre-order by default)
        """
        root = self.resolve(key)
        if not post_order:
            stack = [root]
            while stack:
                content = stack.pop()
                yield content
                children = [self.resolve(child) for child in child_keys_of(content)]
                stack.extend(reversed(children))
            return

        stack_with_state: list[tuple[Content, bool]] = [(root, False)]
        while stack_with_state:
            content, expanded = stack_with_state.pop()
            if expanded:
                yield content
                continue
            stack_with_state.append((content, True))
            for child in reversed(child_keys_of(content)):
                stack_with_state.append((self.resolve(child), False))

    def recurse_up(
        self,
        visitor: Callable[[Content], None],
        key: ContentKey,
        include_self: bool = True,
    ) -> None:
        for content in self.walk_up(key, include_self):
            visitor(content)

    def recurse_down(
        self,
        visitor: Callable[[Content], None],
        key: ContentKey,
        post_order: bool = False,
    ) -> None:
        # Materialize first so visitors may mutate the subtree
        for content in list(self.walk_down(key, post_order)):
            visitor(content)

    def subtree_keys(self, key: ContentKey) -> set[ContentKey]:
        return {content.key for content in self.walk_down(key)}

    def get_content_and_ancestors(self, key: ContentKey) -> list[Content]:
        return list(self.walk_up(key))

    def is_ancestor(self, ancestor_key: ContentKey, key: ContentKey) -> bool:
        """Check whether ancestor_key is key itself or one of its ancestors."""
        return any(content.key == ancestor_key for content in self.walk_up(key))

    def recursive_delete(self, key: ContentKey) -> None:
        """
        Evict a node and everything it owns.

        The parent's child list is left untouched; unlinking is the caller's job.
        """
        evicted = 0
        for content in list(self.walk_down(key, post_order=True)):
            if self.contents.pop(content.key, None) is not None:
                evicted += 1
        logger.debug("Deleted %d content nodes under '%s'", evicted, key)

    def reorder_list(self, list_key: ContentKey, old_index: int, new_index: int) -> None:
        """
        Move one entry of an ordered child list, keeping the others in order.

        Params:
            list_key: Key of a Block or Argument
            old_index: Current position of the entry
            new_index: Position the entry should end up at

        Raises:
            ReorderError: If the node holds no ordered list or an index is out of range
        """
        content = self.resolve(list_key)
        if not isinstance(content, (Block, Argument)):
            raise ReorderError(list_key, f"{content.kind.value} is not an ordered list")
        size = len(content.child_keys)
        if not 0 <= old_index < size or not 0 <= new_index < size:
            raise ReorderError(
                list_key, f"indices {old_index} -> {new_index} out of range for {size} entries"
            )
        moved = content.child_keys.pop(old_index)
        content.child_keys.insert(new_index, moved)

    def reachable_keys(self) -> set[ContentKey]:
        """Keys reachable from the root by owned-child traversal."""
        if self.root_key is None:
            return set()
        return self.subtree_keys(self.root_key)
