"""Tests for the solve() boundary and the end-to-end properties."""
import pytest

from rugatools.config import SearchConfig
from rugatools.errors import InvalidParameterError, MalformedGraphError
from rugatools.solver import solve
from rugatools.utils.validation import sequence_violations

SERIAL = SearchConfig()
MAXIMAL = SearchConfig(policy="maximal")


def _canon_round(pairs):
    return tuple(sorted(tuple(sorted(p)) for p in pairs))


def _round_robin(n):
    """Circle method: vertex n-1 fixed, the rest rotate."""
    m = n - 1
    rounds = []
    for r in range(m):
        pairs = [(r, m)]
        for i in range(1, n // 2):
            pairs.append(((r + i) % m, (r - i) % m))
        rounds.append(_canon_round(pairs))
    return tuple(rounds)


def _all_pairs(seq):
    out = []
    for rnd in seq:
        for g in rnd:
            out.extend((a, b) for a in g for b in g if a < b)
    return out


# --- parameter validation ---

@pytest.mark.parametrize("n,k", [(3, 4), (4, 1), (4, 0), (-1, 2), (5, 2.0)])
def test_invalid_parameters(n, k):
    with pytest.raises(InvalidParameterError):
        solve(n, k, config=SERIAL)


@pytest.mark.parametrize("conflicts", [[(0, 9)], [(2, 2)], [(0, 1), (0, 1)], [(1, 0), (0, 1)]])
def test_malformed_conflicts(conflicts):
    with pytest.raises(MalformedGraphError):
        solve(4, 2, conflicts, config=SERIAL)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        solve(4, 1, config=SERIAL)


# --- known optima ---

@pytest.mark.parametrize("n", [2, 4, 6])
def test_complete_even_pairs_round_robin(n):
    res = solve(n, 2, config=SERIAL)
    assert res.best_length == n - 1
    assert _round_robin(n) in res.sequences


def test_k6_pairs_count():
    res = solve(6, 2, config=SERIAL)
    # 6 distinct 1-factorizations of K6, each in 5! orders
    assert len(res.sequences) == 6 * 120


def test_complete_five_pairs():
    res = solve(5, 2, config=SERIAL)
    assert res.best_length == 1


@pytest.mark.parametrize(
    "n,k,rounds,sizes",
    [
        (4, 3, 1, [4]),
        (6, 3, 1, [3, 3]),
        (3, 2, 1, [3]),
        (5, 3, 1, [5]),
        (7, 2, 3, [3, 2, 2]),
    ],
)
def test_balanced_round_shapes(n, k, rounds, sizes):
    res = solve(n, k, config=SERIAL)
    assert res.best_length == rounds
    for seq in res.sequences:
        for rnd in seq:
            assert sorted(len(g) for g in rnd) == sorted(sizes)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
@pytest.mark.parametrize("config", [SERIAL, MAXIMAL])
def test_whole_class_groups(n, config):
    res = solve(n, n, config=config)
    assert res.best_length == 1
    assert res.sequences == ((((tuple(range(n))),),),)


# --- structural properties ---

@pytest.mark.parametrize("n,k", [(4, 2), (5, 2), (6, 2), (6, 3), (7, 3)])
def test_every_sequence_valid(n, k):
    res = solve(n, k, config=SERIAL)
    for seq in res.sequences:
        assert sequence_violations(n, k, seq) == []
        pairs = _all_pairs(seq)
        assert len(pairs) == len(set(pairs))


def test_every_maximal_sequence_valid():
    res = solve(5, 2, config=MAXIMAL)
    assert res.best_length >= 5
    for seq in res.sequences:
        assert sequence_violations(5, 2, seq, policy="maximal") == []


def test_maximal_allows_more_rounds_than_balanced():
    assert solve(5, 2, config=MAXIMAL).best_length > solve(5, 2, config=SERIAL).best_length


def test_conflicts_respected():
    conflicts = [(0, 1), (2, 3)]
    res = solve(6, 2, conflicts, config=SERIAL)
    for seq in res.sequences:
        assert sequence_violations(6, 2, seq, conflicts) == []
        assert (0, 1) not in _all_pairs(seq)
        assert (2, 3) not in _all_pairs(seq)


@pytest.mark.parametrize("config", [SERIAL, MAXIMAL])
def test_isolated_vertex_is_ignored(config):
    conflicts = [(i, 4) for i in range(4)]
    res = solve(5, 2, conflicts, config=config)
    assert res.best_length == solve(4, 2, config=config).best_length == 3
    for seq in res.sequences:
        for rnd in seq:
            assert all(4 not in g for g in rnd)


def test_bully_vertex_left_out_for_triangles():
    # vertex 6 can only ever pair with vertex 0, never join a triangle
    conflicts = [(i, 6) for i in range(1, 6)]
    res = solve(7, 3, conflicts, config=SERIAL)
    assert res.best_length == solve(6, 3, config=SERIAL).best_length
    assert all(6 not in g for seq in res.sequences for rnd in seq for g in rnd)


def test_no_valid_round_returns_empty_sequence():
    # only pairs (0,1) and (2,3) are compatible, triangles impossible
    conflicts = [(0, 2), (0, 3), (1, 2), (1, 3)]
    res = solve(4, 3, conflicts, config=SERIAL)
    assert res.best_length == 0
    assert res.sequences == ((),)
    assert res.to_lists() == [[]]


@pytest.mark.parametrize("n", [4, 5, 6])
def test_monotone_in_k(n):
    lengths = [solve(n, k, config=SERIAL).best_length for k in range(2, n + 1)]
    assert lengths == sorted(lengths, reverse=True)


UNEVEN = [(0, 3), (1, 2), (1, 3), (2, 4), (3, 5)]


def test_monotone_in_k_with_conflicts():
    lengths = [solve(6, k, UNEVEN, config=SERIAL).best_length for k in range(2, 7)]
    assert lengths[1:] == [1, 1, 0, 0]
    assert lengths == sorted(lengths, reverse=True)


def test_partial_cover_round_when_no_full_cover():
    # active for k=3 is {0, 1, 2, 4, 5}; no 5-clique, so the 4-clique is played alone
    res = solve(6, 3, UNEVEN, config=SERIAL)
    assert res.best_length == 1
    assert res.sequences == ((((0, 1, 4, 5),),),)
    assert sequence_violations(6, 3, res.first(), UNEVEN) == []


@pytest.mark.parametrize(
    "conflicts,policy",
    [
        ([(0, 1), (2, 3)], "balanced"),
        ([(0, 3), (1, 4), (2, 5)], "balanced"),
        (UNEVEN, "balanced"),
        (UNEVEN, "maximal"),
    ],
)
def test_every_sequence_valid_with_conflicts(conflicts, policy):
    res = solve(6, 2, conflicts, config=SearchConfig(policy=policy))
    assert res.best_length >= 1
    for seq in res.sequences:
        assert sequence_violations(6, 2, seq, conflicts, policy=policy) == []


def test_deterministic():
    a = solve(6, 2, [(0, 5)], config=SERIAL)
    b = solve(6, 2, [(0, 5)], config=SERIAL)
    assert a == b


def test_to_lists_shape():
    res = solve(4, 2, config=SERIAL)
    out = res.to_lists()
    assert len(out) == len(res.sequences)
    assert out[0][0] == [[0, 1], [2, 3]]
    assert res.first() == res.sequences[0]
