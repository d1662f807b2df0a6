"""
Helpers for navigating editor state in tests.
"""

from proctree.content import Action, Argument, Value
from proctree.editor import EditorState


def root_executables(state: EditorState) -> list:
    """Executables of the root block, in order."""
    block = state.store.resolve(state.store.root.root_block_key)
    return [state.store.resolve(key) for key in block.child_keys]


def argument_of(state: EditorState, owner_key: str, name: str) -> Argument:
    owner = state.store.resolve(owner_key)
    return state.store.resolve(owner.child_key_map[name], Argument)


def only_child(state: EditorState, argument: Argument):
    assert len(argument.child_keys) == 1
    return state.store.resolve(argument.child_keys[0])


def first_value(state: EditorState, action: Action, name: str) -> Value:
    return only_child(state, argument_of(state, action.key, name))
