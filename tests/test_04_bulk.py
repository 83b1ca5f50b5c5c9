"""Test bulk updates, mapping and filling, sequentially and in parallel."""
import pytest
import typedmatrix as tm


@pytest.fixture
def grid(policy):
    return tm.IntMatrix.of([[i * 10 + j for j in range(7)] for i in range(5)]).with_policy(policy)


@pytest.mark.timeout(60)
def test_update_all(grid):
    grid.update_all(lambda v: v * 2)
    assert (grid.row(4) == [80, 82, 84, 86, 88, 90, 92])
    grid.update_all_by_point(lambda i, j: i - j)
    assert (grid.get(0, 6) == -6 and grid.get(4, 0) == 4)


@pytest.mark.timeout(60)
def test_update_all_wraps_around(policy):
    m = tm.IntMatrix.of([[2**31 - 1, 0]]).with_policy(policy)
    m.update_all(lambda v: v + 1)
    assert (m.row(0) == [-2**31, 1])


@pytest.mark.timeout(60)
def test_replace_if(grid):
    grid.replace_if(lambda v: v % 2 == 1, -1)
    assert (grid.row(0) == [0, -1, 2, -1, 4, -1, 6])
    grid.replace_if_by_point(lambda i, j: i == j, 100)
    assert ([grid.get(k, k) for k in range(5)] == [100] * 5)


@pytest.mark.timeout(60)
def test_failed_update_leaves_matrix_unchanged(policy):
    m = tm.IntMatrix.of([[1, 2, 3], [4, 5, 6]]).with_policy(policy)
    before = m.array()
    with pytest.raises(TypeError):
        m.update_all(lambda v: v * 10 if v < 4 else 0.5)
    with pytest.raises(TypeError):
        m.update_all_by_point(lambda i, j: i + j if j < 2 else 'x')
    with pytest.raises(TypeError):
        m.update_row(0, lambda v: v * 10 if v < 3 else 'x')
    with pytest.raises(TypeError):
        m.update_column(1, lambda v: v * 10 if v < 5 else 'x')

    def fails_on_six(v):
        if v == 6:
            raise TypeError("rejected")
        return v > 1

    with pytest.raises(TypeError):
        m.replace_if(fails_on_six, 0)
    with pytest.raises(TypeError):
        m.replace_if_by_point(lambda i, j: fails_on_six(i * 3 + j + 1), 0)
    assert (m.array() == before)

    sq = tm.IntMatrix.of([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).with_policy(policy)
    before = sq.array()
    with pytest.raises(TypeError):
        sq.update_lu2rd(lambda v: v * 10 if v < 9 else 0.5)
    with pytest.raises(TypeError):
        sq.update_ru2ld(lambda v: v * 10 if v < 7 else 0.5)
    assert (sq.array() == before)


@pytest.mark.timeout(60)
def test_map_returns_new_matrix(grid):
    before = grid.copy()
    mapped = grid.map(lambda v: v + 1)
    assert (grid == before)
    assert (mapped.get(3, 4) == 35)
    assert isinstance(mapped, tm.IntMatrix)


@pytest.mark.timeout(60)
def test_map_to_obj(grid):
    boxed = grid.map_to_obj(str)
    assert isinstance(boxed, tm.Matrix)
    assert (boxed.get(2, 3) == '23')
    doubles = grid.map_to_obj(lambda v: v / 2, tm.DoubleMatrix)
    assert isinstance(doubles, tm.DoubleMatrix)
    assert (doubles.get(1, 1) == 5.5)
    flags = grid.map_to_obj(lambda v: v > 20, tm.BooleanMatrix)
    assert (flags.column(0) == [False, False, False, True, True])


@pytest.mark.timeout(60)
def test_map_checks_result_type(grid):
    with pytest.raises(TypeError):
        grid.map(lambda v: v / 3)


def test_fill(m23):
    m23.fill(9)
    assert (m23 == tm.IntMatrix.of([[9, 9, 9], [9, 9, 9]]))


def test_fill_block_clips_at_edges(m33):
    m33.fill_block([[0, 0, 0], [0, 0, 0]], 2, 1)
    assert (m33 == tm.IntMatrix.of([[1, 2, 3], [4, 5, 6], [7, 0, 0]]))
    m33.fill_block([[-1]])
    assert (m33.get(0, 0) == -1)
    m33.fill_block([[5, 5]], 3, 3)
    assert (m33.get(2, 2) == 0)
    with pytest.raises(tm.RangeError):
        m33.fill_block([[1]], 4, 0)
    with pytest.raises(tm.RangeError):
        m33.fill_block([[1]], 0, -1)


def test_fill_block_is_all_or_nothing(m23):
    with pytest.raises(TypeError):
        m23.fill_block([[0, 0], [0, 'x']])
    assert (m23 == tm.IntMatrix.of([[1, 2, 3], [4, 5, 6]]))


def test_flat_op(m23):
    m23.flat_op(lambda values: values.sort(reverse=True))
    assert (m23 == tm.IntMatrix.of([[6, 5, 4], [3, 2, 1]]))
    with pytest.raises(tm.ShapeError):
        m23.flat_op(lambda values: values.append(0))
    assert (m23.row(1) == [3, 2, 1])


def test_for_each(m23):
    visited = []
    m23.for_each(lambda i, j: visited.append((i, j)))
    assert (visited == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)])
    values = []
    m23.for_each_value(values.append, 0, 2, 1, 3)
    assert (values == [2, 3, 5, 6])
    values.clear()
    m23.for_each_value(values.append)
    assert (values == [1, 2, 3, 4, 5, 6])
    with pytest.raises(tm.RangeError):
        m23.for_each_value(values.append, 0, 3)


@pytest.mark.timeout(120)
def test_parallel_and_sequential_bulk_results_match():
    parallel = tm.ParallelismPolicy(threshold=0, parallel_capable=True, max_workers=4)
    for rows, cols in [(3, 40), (40, 3), (17, 17)]:
        base = tm.DoubleMatrix.random(rows * cols, seed=rows).reshape(rows, cols)
        seq = base.with_policy(tm.SEQUENTIAL)
        par = base.with_policy(parallel)
        assert (seq.map(lambda v: v * 3.1 - 1) == par.map(lambda v: v * 3.1 - 1))
        assert (seq.zip_with(seq, lambda a, b: a * b) == par.zip_with(par, lambda a, b: a * b))
        seq.update_all(lambda v: v / 7)
        par.update_all(lambda v: v / 7)
        assert (seq == par)
