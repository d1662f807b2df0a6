"""
Tests for coordinate arithmetic.

Coordinates are child-index sequences from the process root block; these tests
pin down ordering, shared ancestors and block/executable addressing.
"""

import pytest

from proctree.core.coordinates import (
    ROOT,
    coordinates_address_block,
    coordinates_equal,
    coordinates_nth_child,
    coordinates_parent,
    get_shared_ancestor,
    is_predecessor,
)


class TestCoordinateBasics:
    """Tests for equality, parent and child navigation."""

    def test_equal_coordinates(self):
        """Test sequences with the same indices are equal regardless of container."""
        assert coordinates_equal((1, 0, 2), (1, 0, 2))
        assert coordinates_equal([1, 0], (1, 0))
        assert not coordinates_equal((1, 0), (1, 0, 0))

    def test_parent_drops_last_index(self):
        assert coordinates_parent((1, 0, 2)) == (1, 0)
        assert coordinates_parent((3,)) == ROOT

    def test_root_has_no_parent(self):
        """Test asking for the parent of the root is rejected."""
        with pytest.raises(ValueError):
            coordinates_parent(ROOT)

    def test_nth_child(self):
        assert coordinates_nth_child(ROOT, 2) == (2,)
        assert coordinates_nth_child((1, 0), 3) == (1, 0, 3)

    def test_even_length_addresses_block(self):
        """Test even-length coordinates address blocks, odd-length executables."""
        assert coordinates_address_block(ROOT)
        assert coordinates_address_block((1, 0))
        assert not coordinates_address_block((1,))
        assert not coordinates_address_block((1, 0, 0))


class TestSharedAncestor:
    """Tests for the longest common prefix of two positions."""

    def test_siblings_share_parent_block(self):
        assert get_shared_ancestor((0,), (1,)) == ROOT

    def test_nested_positions(self):
        assert get_shared_ancestor((1, 0, 0), (1, 0, 2)) == (1, 0)
        assert get_shared_ancestor((1, 0, 0), (1, 1, 0)) == (1,)

    def test_prefix_is_shared_ancestor(self):
        """Test the shorter sequence is returned when one contains the other."""
        assert get_shared_ancestor((1,), (1, 0, 3)) == (1,)

    def test_last_index_is_compared(self):
        """Test the final index takes part in the comparison."""
        assert get_shared_ancestor((2, 0, 1), (2, 0, 1)) == (2, 0, 1)
        assert get_shared_ancestor((2, 0, 1), (2, 0, 4)) == (2, 0)


class TestIsPredecessor:
    """Tests for execution ordering of two positions."""

    def test_earlier_sibling_precedes(self):
        assert is_predecessor((0,), (1,))
        assert not is_predecessor((1,), (0,))

    def test_nested_inside_earlier_executable_precedes(self):
        assert is_predecessor((0, 0, 5), (1,))
        assert not is_predecessor((2, 0, 0), (1,))

    def test_prefix_counts_as_predecessor(self):
        """Test containment in either direction counts as a predecessor."""
        assert is_predecessor((1,), (1, 0, 0))
        assert is_predecessor((1, 0, 0), (1,))
        assert is_predecessor((1,), (1,))

    def test_root_precedes_everything(self):
        assert is_predecessor(ROOT, (4, 1, 0))
