"""Unit tests for QuadratureWorkspace."""

import pytest

from shark.numerics import InvalidConfigurationError, QuadratureWorkspace, Subinterval


def _split(workspace: QuadratureWorkspace, index: int, errors: tuple[float, float]) -> None:
    parent = workspace[index]
    mid = 0.5 * (parent.left + parent.right)
    half = 0.5 * parent.integral
    workspace.replace(
        index,
        Subinterval(parent.left, mid, half, errors[0], parent.depth + 1),
        Subinterval(mid, parent.right, half, errors[1], parent.depth + 1),
    )


class TestConstruction:
    @pytest.mark.parametrize("limit", [0, -3, 1.5, False])
    def test_invalid_limit(self, limit):
        with pytest.raises(InvalidConfigurationError):
            QuadratureWorkspace(limit)

    def test_starts_empty(self):
        workspace = QuadratureWorkspace(8)
        assert workspace.limit == 8
        assert workspace.size == 0
        assert len(workspace) == 0
        assert workspace.totals() == (0.0, 0.0)


class TestSubdivision:
    def test_initialise_stores_single_interval(self):
        workspace = QuadratureWorkspace(4)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        assert workspace.size == 1
        assert workspace[0] == Subinterval(0.0, 1.0, 2.0, 0.5, 0)

    def test_replace_grows_by_one(self):
        workspace = QuadratureWorkspace(4)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        index = workspace.pop_max_error()
        _split(workspace, index, (0.1, 0.2))

        assert workspace.size == 2
        assert workspace.totals() == (2.0, pytest.approx(0.3))
        assert [s.left for s in workspace.intervals()] == [0.0, 0.5]
        assert all(s.depth == 1 for s in workspace.intervals())

    def test_largest_error_selected_first(self):
        workspace = QuadratureWorkspace(4)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        _split(workspace, workspace.pop_max_error(), (0.1, 0.3))

        index = workspace.pop_max_error()
        assert workspace[index].left == 0.5

    def test_ties_broken_by_insertion_order(self):
        workspace = QuadratureWorkspace(4)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        _split(workspace, workspace.pop_max_error(), (0.2, 0.2))

        first = workspace.pop_max_error()
        second = workspace.pop_max_error()
        assert workspace[first].left == 0.0
        assert workspace[second].left == 0.5

    def test_replace_when_full_raises(self):
        workspace = QuadratureWorkspace(1)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        assert workspace.is_full()
        with pytest.raises(IndexError):
            _split(workspace, workspace.pop_max_error(), (0.1, 0.1))

    def test_pop_from_empty_raises(self):
        with pytest.raises(IndexError):
            QuadratureWorkspace(2).pop_max_error()

    def test_index_out_of_range(self):
        workspace = QuadratureWorkspace(2)
        workspace.initialise(0.0, 1.0, 1.0, 0.0)
        with pytest.raises(IndexError):
            workspace[1]


class TestReuse:
    def test_clear_keeps_capacity(self):
        workspace = QuadratureWorkspace(3)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        _split(workspace, workspace.pop_max_error(), (0.1, 0.2))

        workspace.clear()
        assert workspace.size == 0
        assert workspace.limit == 3
        assert workspace.intervals() == []

    def test_initialise_discards_previous_call(self):
        workspace = QuadratureWorkspace(3)
        workspace.initialise(0.0, 1.0, 2.0, 0.5)
        _split(workspace, workspace.pop_max_error(), (0.1, 0.2))

        workspace.initialise(5.0, 6.0, 1.0, 0.25)
        assert workspace.size == 1
        assert workspace.pop_max_error() == 0
        with pytest.raises(IndexError):
            workspace.pop_max_error()
