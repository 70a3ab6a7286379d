"""Tests for BoundEstimator."""
from rugatools.graph.state import RemainingGraphState
from rugatools.search.bounds import BoundEstimator


def test_balanced_bounds_complete_even():
    s = RemainingGraphState.complete(6)
    b = BoundEstimator(2, "balanced", tuple(range(6)))
    assert b.sizes == (2, 2, 2)
    assert b.edge_budget_bound(s) == 15 // 3
    assert b.min_degree_bound(s) == 5
    assert b.upper_bound(s) == 5


def test_balanced_bounds_odd_leftover():
    # n=7, k=2 -> [3, 2, 2], 5 edges per round
    s = RemainingGraphState.complete(7)
    b = BoundEstimator(2, "balanced", tuple(range(7)))
    assert b.edges_per_round == 5
    assert b.edge_budget_bound(s) == 21 // 5
    assert b.min_degree_bound(s) == 6
    assert b.upper_bound(s) == 4


def test_min_degree_bound_tighter():
    # vertex 0 only has two partners left
    s = RemainingGraphState.from_conflicts(4, [(0, 1)])
    b = BoundEstimator(2, "balanced", tuple(range(4)))
    assert b.edge_budget_bound(s) == 5 // 2
    assert b.min_degree_bound(s) == 2
    assert b.upper_bound(s) == 2


def test_bound_ignores_inactive_edges():
    s = RemainingGraphState.from_edges(5, [(0, 1), (0, 2), (1, 2), (3, 4)])
    b = BoundEstimator(3, "balanced", (0, 1, 2))
    assert b.sizes == (3,)
    assert b.edge_budget_bound(s) == 1
    assert b.upper_bound(s) == 1


def test_maximal_bound_uses_edges_only():
    s = RemainingGraphState.complete(5)
    b = BoundEstimator.for_state(s, 3, "maximal")
    assert b.min_degree_bound(s) is None
    assert b.upper_bound(s) == 10 // 3


def test_no_active_vertices_bound_zero():
    s = RemainingGraphState.from_edges(3, [])
    b = BoundEstimator(2, "balanced", ())
    assert b.upper_bound(s) == 0


def test_bound_never_below_true_rounds_k4():
    # K4, k=2 admits 3 rounds; the bound must not undercut that
    s = RemainingGraphState.complete(4)
    b = BoundEstimator(2, "balanced", tuple(range(4)))
    assert b.upper_bound(s) >= 3


def test_for_state_skips_inactive_vertex():
    # vertex 4 has no partners left; the other four still admit 3 rounds
    s = RemainingGraphState.complete(5).with_groups_removed([(0, 4), (1, 4), (2, 4), (3, 4)])
    b = BoundEstimator.for_state(s, 2)
    assert b.active == (0, 1, 2, 3)
    assert b.sizes == (2, 2)
    assert b.upper_bound(s) == 3


def test_partial_cover_drops_min_degree_bound():
    # active {0, 1, 2, 4, 5} for k=3, but only the 4-clique {0, 1, 4, 5} can be grouped
    s = RemainingGraphState.from_conflicts(6, [(0, 3), (1, 2), (1, 3), (2, 4), (3, 5)])
    b = BoundEstimator.for_state(s, 3)
    assert b.active == (0, 1, 2, 4, 5)
    assert b.sizes == (4,)
    assert not b.full_cover
    assert b.min_degree_bound(s) is None
    assert b.edge_budget_bound(s) == 8 // 6
    assert b.upper_bound(s) == 1
