"""Test shape validation, the parallelism policy and logging control."""
import logging
import pytest
import typedmatrix as tm
from typedmatrix.pool import MatrixPool
from typedmatrix.shapes import check_rectangular, check_square, check_range, check_index, check_positive


def test_check_rectangular():
    assert (check_rectangular([]) == 0)
    assert (check_rectangular([[1, 2], [3, 4]]) == 2)
    with pytest.raises(tm.ShapeError):
        check_rectangular([[1, 2], [3]])


def test_check_square_and_range():
    check_square(3, 3)
    with pytest.raises(tm.ShapeError):
        check_square(2, 3)
    check_range(0, 0, 0)
    check_range(1, 3, 3)
    for args in [(-1, 2, 3), (2, 1, 3), (0, 4, 3)]:
        with pytest.raises(tm.RangeError):
            check_range(*args)


def test_check_index_rejects_negative():
    check_index(0, 1)
    with pytest.raises(tm.MatrixIndexError):
        check_index(-1, 3)
    with pytest.raises(tm.MatrixIndexError):
        check_index(3, 3)
    with pytest.raises(tm.ShapeError):
        check_positive(0, 'row_repeats')


def test_error_hierarchy():
    assert issubclass(tm.ShapeError, ValueError)
    assert issubclass(tm.RangeError, IndexError)
    assert issubclass(tm.MatrixIndexError, IndexError)
    for err in [tm.ShapeError, tm.RangeError, tm.MatrixIndexError]:
        assert issubclass(err, tm.MatrixError)


def test_should_parallelize():
    policy = tm.ParallelismPolicy(threshold=10, parallel_capable=True)
    assert not policy.should_parallelize(10)
    assert policy.should_parallelize(11)
    assert policy.should_parallelize(5, 3)
    incapable = tm.ParallelismPolicy(threshold=10, parallel_capable=False)
    assert not incapable.should_parallelize(1000000)


def test_choose_outer_dimension():
    assert (tm.ParallelismPolicy.choose_outer_dimension(2, 3) == tm.BY_ROW)
    assert (tm.ParallelismPolicy.choose_outer_dimension(2, 2) == tm.BY_ROW)
    assert (tm.ParallelismPolicy.choose_outer_dimension(3, 2) == tm.BY_COLUMN)


@pytest.mark.timeout(60)
@pytest.mark.parametrize("parallel", [False, True])
def test_execute_runs_every_task(parallel):
    policy = tm.ParallelismPolicy(threshold=0, parallel_capable=True, max_workers=3)
    out = [None] * 50

    def task(k):
        out[k] = k * k

    policy.execute(50, task, parallel)
    assert (out == [k * k for k in range(50)])


@pytest.mark.timeout(60)
def test_execute_propagates_task_errors():
    policy = tm.ParallelismPolicy(threshold=0, parallel_capable=True, max_workers=2)

    def task(k):
        if k == 7:
            raise ValueError("task 7 failed")

    with pytest.raises(ValueError):
        policy.execute(10, task, True)


@pytest.mark.timeout(60)
def test_matrix_pool_context():
    with MatrixPool(2) as pool:
        assert (pool.map(lambda k: k + 1, range(5)) == [1, 2, 3, 4, 5])
    with MatrixPool(processes=1, initializer=lambda: None) as pool:
        assert (pool.apply(max, (3, 7)) == 7)


def test_environment_configuration(monkeypatch):
    monkeypatch.setenv(tm.ENV_PARALLEL, '0')
    monkeypatch.setenv(tm.ENV_MAX_WORKERS, '3')
    policy = tm.ParallelismPolicy()
    assert not policy.parallel_capable
    assert (policy.max_workers == 3)
    assert (tm.ParallelismPolicy(max_workers=0).max_workers == 1)


def test_invalid_max_workers_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv(tm.ENV_MAX_WORKERS, 'many')
    with caplog.at_level(logging.WARNING, logger="typedmatrix.pool"):
        policy = tm.ParallelismPolicy()
    assert (policy.max_workers >= 1)
    assert any(tm.ENV_MAX_WORKERS in r.getMessage() for r in caplog.records)


@pytest.mark.timeout(60)
def test_fan_out_is_logged_unless_disabled(caplog):
    policy = tm.ParallelismPolicy(threshold=0, parallel_capable=True, max_workers=2)
    with caplog.at_level(logging.DEBUG, logger="typedmatrix.pool"):
        policy.execute(4, lambda k: None, True)
    assert any("Splitting" in r.getMessage() for r in caplog.records)
    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="typedmatrix.pool"):
        with tm.DisableLogger():
            policy.execute(4, lambda k: None, True)
    assert (len(caplog.records) == 0)


def test_matrices_inherit_policy(m23):
    policy = tm.ParallelismPolicy(threshold=1, parallel_capable=False)
    m = m23.with_policy(policy)
    assert (m.policy is policy)
    assert (m23.policy is tm.DEFAULT_POLICY)
    assert (m.transpose().policy is policy)
    assert (m.map(lambda v: v + 1).policy is policy)
    assert (m.copy(0, 1).policy is policy)
    assert (m == m23)
