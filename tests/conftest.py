import pytest
import typedmatrix as tm

# Splits every bulk operation into tasks, no matter how small the matrix is
FORCED_PARALLEL = tm.ParallelismPolicy(threshold=0, parallel_capable=True, max_workers=4)


@pytest.fixture(params=[tm.SEQUENTIAL, FORCED_PARALLEL], ids=["sequential", "parallel"], scope="session")
def policy(request: pytest.FixtureRequest) -> tm.ParallelismPolicy:
    """Provide session-level fixture for sequential and parallel execution of bulk operations."""
    return request.param


@pytest.fixture(params=[tm.IntMatrix, tm.LongMatrix, tm.DoubleMatrix], scope="session")
def numeric_cls(request: pytest.FixtureRequest) -> type:
    """Provide session-level fixture for the numeric matrix types."""
    return request.param


@pytest.fixture
def m23() -> tm.IntMatrix:
    return tm.IntMatrix.of([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def m33() -> tm.IntMatrix:
    return tm.IntMatrix.of([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
