"""Test construction, cell access, rows, columns and diagonals."""
import pytest
import typedmatrix as tm
from typedmatrix import Point


def test_construction_copies_input():
    rows = [[1, 2], [3, 4]]
    m = tm.IntMatrix.of(rows)
    rows[0][0] = 9
    assert (m.get(0, 0) == 1)
    assert (m.rows == 2 and m.cols == 2 and m.count == 4)


def test_empty_normalization():
    for a in [None, [], [[]], [[], []]]:
        m = tm.IntMatrix(a)
        assert m.is_empty()
        assert (m.rows == 0 and m.cols == 0 and m.count == 0)
        assert (m == tm.IntMatrix.empty())


def test_non_rectangular_input():
    with pytest.raises(tm.ShapeError):
        tm.Matrix.of([[1, 2], [3]])


def test_factories():
    assert (tm.IntMatrix.repeat(7, 3) == tm.IntMatrix.of([[7, 7, 7]]))
    assert (tm.IntMatrix.diagonal_lu2rd([1, 2]) == tm.IntMatrix.of([[1, 0], [0, 2]]))
    assert (tm.IntMatrix.diagonal_ru2ld([1, 2]) == tm.IntMatrix.of([[0, 1], [2, 0]]))
    assert (tm.IntMatrix.diagonal([1, 2, 3], [4, 5, 6]) == tm.IntMatrix.of([[1, 0, 4], [0, 5, 0], [6, 0, 3]]))
    assert (tm.BooleanMatrix.diagonal_lu2rd([True, True]).get(0, 1) is False)
    assert (tm.Matrix.diagonal_lu2rd(['x']).get(0, 0) == 'x')
    assert tm.IntMatrix.diagonal().is_empty()
    with pytest.raises(tm.ShapeError):
        tm.IntMatrix.diagonal([1, 2], [1])
    with pytest.raises(tm.RangeError):
        tm.IntMatrix.repeat(1, -1)


def test_get_and_set(m23):
    assert (m23.get(1, 2) == 6)
    assert (m23.get(Point(0, 1)) == 2)
    m23.set(0, 0, 10)
    m23.set(Point(1, 1), 20)
    assert (m23 == tm.IntMatrix.of([[10, 2, 3], [4, 20, 6]]))
    for i, j in [(2, 0), (0, 3), (-1, 0), (0, -1)]:
        with pytest.raises(tm.MatrixIndexError):
            m23.get(i, j)
    with pytest.raises(tm.MatrixIndexError):
        m23.set(Point(2, 2), 0)
    with pytest.raises(TypeError):
        m23.set(0, 0)


def test_neighbors(m23):
    assert (m23.up_of(0, 0) is None)
    assert (m23.up_of(1, 0) == 1)
    assert (m23.down_of(0, 2) == 6)
    assert (m23.down_of(1, 2) is None)
    assert (m23.left_of(0, 0) is None)
    assert (m23.left_of(1, 1) == 4)
    assert (m23.right_of(1, 1) == 6)
    assert (m23.right_of(0, 2) is None)
    with pytest.raises(tm.MatrixIndexError):
        m23.up_of(2, 0)


def test_adjacent_points(m23, m33):
    assert (m23.adjacent4_points(0, 0) == [None, Point(0, 1), Point(1, 0), None])
    assert (m23.adjacent8_points(0, 1) == [None, None, None, Point(0, 2), Point(1, 2), Point(1, 1), Point(1, 0), Point(0, 0)])
    assert (m33.adjacent8_points(1, 1) == [Point(0, 0), Point(0, 1), Point(0, 2), Point(1, 2),
                                           Point(2, 2), Point(2, 1), Point(2, 0), Point(1, 0)])
    # right-down of (0, 1)
    assert (m33.adjacent8_points(0, 1)[4] == Point(1, 2))
    assert (m33.adjacent8_points(2, 2) == [Point(1, 1), Point(1, 2), None, None, None, None, None, Point(2, 1)])


def test_row_and_column(m23):
    row = m23.row(0)
    row[0] = 100
    assert (m23.get(0, 0) == 1)
    assert (m23.column(1) == [2, 5])
    view = m23.row_view(1)
    assert (view == [4, 5, 6])
    assert (len(view) == 3 and view[2] == 6)
    m23.set(1, 0, 40)
    assert (view[0] == 40)
    with pytest.raises(TypeError):
        view[0] = 1
    with pytest.raises(tm.MatrixIndexError):
        m23.row(2)
    with pytest.raises(tm.MatrixIndexError):
        m23.column(3)


def test_set_and_update_rows_and_columns(m23):
    m23.set_row(0, [7, 8, 9])
    m23.set_column(2, [0, 0])
    assert (m23 == tm.IntMatrix.of([[7, 8, 0], [4, 5, 0]]))
    m23.update_row(1, lambda v: v * 10)
    m23.update_column(0, lambda v: v + 1)
    assert (m23 == tm.IntMatrix.of([[8, 8, 0], [41, 50, 0]]))
    with pytest.raises(tm.ShapeError):
        m23.set_row(0, [1, 2])
    with pytest.raises(tm.ShapeError):
        m23.set_column(0, [1, 2, 3])
    with pytest.raises(TypeError):
        m23.set_row(1, [1, 2, 'x'])
    assert (m23.row(1) == [41, 50, 0])


def test_diagonals(m33):
    assert (m33.get_lu2rd() == [1, 5, 9])
    assert (m33.get_ru2ld() == [3, 5, 7])
    m33.set_lu2rd([0, 0, 0, 99])
    assert (m33.get_lu2rd() == [0, 0, 0])
    m33.set_ru2ld([1, 1, 1])
    assert (m33 == tm.IntMatrix.of([[0, 2, 1], [4, 1, 6], [1, 8, 0]]))
    m33.update_lu2rd(lambda v: v + 5)
    m33.update_ru2ld(lambda v: -v)
    assert (m33 == tm.IntMatrix.of([[5, 2, -1], [4, -6, 6], [-1, 8, 5]]))
    with pytest.raises(tm.ShapeError):
        m33.set_lu2rd([1, 2])
    with pytest.raises(tm.ShapeError):
        m33.set_ru2ld([1])


def test_diagonals_require_square(m23):
    for op in [m23.get_lu2rd, m23.get_ru2ld, lambda: m23.update_lu2rd(abs), lambda: m23.set_ru2ld([1, 2])]:
        with pytest.raises(tm.ShapeError):
            op()
