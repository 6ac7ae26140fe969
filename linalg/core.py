# --- Purpose: The dense Matrix type: storage, element access and operators. ---

import itertools
import operator
from typing import Iterable, List, Tuple

import numpy as np

from . import backend
from .config import DTYPE
from .errors import ShapeMismatch, IndexOutOfBounds, InvalidShape
from .formatting import render


def _check_dimension(name: str, value) -> int:
    value = operator.index(value)
    if value < 0:
        raise InvalidShape(f"{name} must be non-negative, got {value}")
    return value


def _require_matrix(value, op: str):
    if not isinstance(value, Matrix):
        raise TypeError(f"Unsupported operand type for {op}: 'Matrix' and '{type(value).__name__}'")
    return value


class Matrix:
    """
    A dense rows x cols matrix of float64 values.

    Elements live in ``data``, a flat numpy array in row-major order:
    element (i, j) is stored at offset ``i * cols + j``, and
    ``len(data) == rows * cols`` always holds. Every matrix owns its
    storage; factories and copies never share buffers with their inputs.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        data: Flat row-major element storage
    """

    # Mutable content, so instances are unhashable
    __hash__ = None

    # numpy defers binary operators and comparisons to Matrix
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int, data=None):
        """
        Create a matrix from its shape and an optional flat row-major
        sequence of elements. Without ``data`` the matrix is zero-filled.

        Raises:
            InvalidShape: if a dimension is negative
            ShapeMismatch: if ``data`` is nested or does not hold exactly
                rows * cols elements
        """
        self.rows = _check_dimension("rows", rows)
        self.cols = _check_dimension("cols", cols)
        size = self.rows * self.cols

        if data is None:
            self.data = np.zeros(size, dtype=DTYPE)
            return

        flat = np.array(data, dtype=DTYPE)
        if flat.ndim != 1:
            raise ShapeMismatch(
                f"Expected a flat sequence of elements, got {flat.ndim} dimensions"
            )
        if flat.size != size:
            raise ShapeMismatch(
                f"Expected {size} elements for shape ({self.rows}, {self.cols}), got {flat.size}"
            )
        self.data = flat

    @classmethod
    def _wrap(cls, rows: int, cols: int, data: np.ndarray) -> 'Matrix':
        """Internal constructor for freshly computed storage; takes ownership of ``data``."""
        obj = cls.__new__(cls)
        obj.rows = rows
        obj.cols = cols
        obj.data = data
        return obj

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_scalar(cls, rows: int, cols: int, value: float) -> 'Matrix':
        """Create a rows x cols matrix with every element set to ``value``."""
        rows = _check_dimension("rows", rows)
        cols = _check_dimension("cols", cols)
        return cls._wrap(rows, cols, np.full(rows * cols, value, dtype=DTYPE))

    @classmethod
    def zeros(cls, rows: int, cols: int) -> 'Matrix':
        return cls.from_scalar(rows, cols, 0.0)

    @classmethod
    def from_rows(cls, rows: int, cols: int, row_data: Iterable[Iterable[float]]) -> 'Matrix':
        """
        Create a matrix from a sequence of rows.

        Args:
            rows: Expected number of rows
            cols: Expected number of columns in every row
            row_data: Rows of elements, concatenated in order into storage

        Raises:
            ShapeMismatch: if the number of rows or the length of any row
                does not match the declared shape
        """
        rows = _check_dimension("rows", rows)
        cols = _check_dimension("cols", cols)
        row_data = [list(row) for row in row_data]

        if len(row_data) != rows:
            raise ShapeMismatch(
                f"Inconsistent row length: expected {rows} rows, got {len(row_data)}"
            )
        for index, row in enumerate(row_data):
            if len(row) != cols:
                raise ShapeMismatch(
                    f"Inconsistent column length: expected {cols} columns, "
                    f"got {len(row)} in row {index}"
                )

        data = np.fromiter(itertools.chain.from_iterable(row_data), dtype=DTYPE, count=rows * cols)
        return cls._wrap(rows, cols, data)

    @classmethod
    def identity(cls, size: int) -> 'Matrix':
        """Create a size x size matrix with 1.0 on the main diagonal and 0.0 elsewhere."""
        size = _check_dimension("size", size)
        return cls._wrap(size, size, np.eye(size, dtype=DTYPE).reshape(-1))

    @classmethod
    def from_numpy(cls, array) -> 'Matrix':
        """Create a matrix from a 2-D array-like. The data is copied."""
        grid = np.array(array, dtype=DTYPE, order='C')
        if grid.ndim != 2:
            raise InvalidShape(f"Matrices must be 2-dimensional, got {grid.ndim} dimensions")
        rows, cols = grid.shape
        return cls._wrap(rows, cols, grid.reshape(-1))

    # ------------------------------------------------------------------
    # Shape & element access
    # ------------------------------------------------------------------

    def shape(self) -> Tuple[int, int]:
        """Return the shape of the matrix in the form (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Return the total number of elements."""
        return self.rows * self.cols

    def is_square(self) -> bool:
        return self.rows == self.cols

    def _offset(self, i, j) -> int:
        i = operator.index(i)
        j = operator.index(j)
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexOutOfBounds(self.shape(), (i, j))
        return i * self.cols + j

    def get(self, i: int, j: int) -> float:
        """Return element (i, j). Raises IndexOutOfBounds outside the matrix."""
        return float(self.data[self._offset(i, j)])

    def set(self, i: int, j: int, value: float):
        """Overwrite element (i, j). Raises IndexOutOfBounds outside the matrix."""
        self.data[self._offset(i, j)] = value

    def __getitem__(self, index):
        i, j = self._unpack_index(index)
        return self.get(i, j)

    def __setitem__(self, index, value):
        i, j = self._unpack_index(index)
        self.set(i, j, value)

    @staticmethod
    def _unpack_index(index):
        if not isinstance(index, tuple) or len(index) != 2:
            raise TypeError("Matrix indices must be (row, col) pairs")
        return index

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def copy(self) -> 'Matrix':
        """Return a deep copy; the new matrix owns its own storage."""
        return type(self)._wrap(self.rows, self.cols, self.data.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape() != other.shape():
            return False
        return bool(np.array_equal(self.data, other.data))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: 'Matrix') -> 'Matrix':
        """Element-wise sum. Raises ShapeMismatch unless both shapes are equal."""
        return backend.add(self, _require_matrix(other, "+"))

    def multiply(self, other: 'Matrix') -> 'Matrix':
        """Matrix product. Raises ShapeMismatch unless self.cols == other.rows."""
        return backend.multiply(self, _require_matrix(other, "@"))

    def multiply_in_place(self, other: 'Matrix') -> 'Matrix':
        """
        Replace this matrix with ``self @ other``.
        The storage is swapped out, since the result shape generally differs.
        """
        result = backend.multiply(self, _require_matrix(other, "@="))
        self.rows, self.cols, self.data = result.rows, result.cols, result.data
        return self

    def scale(self, scalar: float) -> 'Matrix':
        """Return a new matrix with every element multiplied by ``scalar``."""
        if not backend.is_scalar(scalar):
            raise TypeError(f"Scalar must be a real number, got {type(scalar).__name__}")
        return backend.scale(self, scalar)

    def transpose(self) -> 'Matrix':
        """Return a new (cols x rows) matrix with result(i, j) = self(j, i)."""
        return backend.transpose(self)

    @property
    def T(self) -> 'Matrix':
        return self.transpose()

    def pow(self, exponent: int) -> 'Matrix':
        """
        Raise a square matrix to a non-negative integer power.

        ``pow(0)`` is the identity of the same size whatever the contents.

        Raises:
            PreconditionViolation: if the matrix is not square or the
                exponent is negative
        """
        return backend.power(self, exponent)

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return backend.add(self, other)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return backend.multiply(self, other)

    def __imatmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply_in_place(other)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return backend.multiply(self, other)
        if backend.is_scalar(other):
            return backend.scale(self, other)
        return NotImplemented

    def __rmul__(self, other):
        # Handles the case `2 * matrix`
        if backend.is_scalar(other):
            return backend.scale(self, other)
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply_in_place(other)
        # Scalars fall back to __mul__ and rebind the name
        return NotImplemented

    def __pow__(self, exponent, modulo=None):
        if modulo is not None:
            return NotImplemented
        return backend.power(self, exponent)

    # ------------------------------------------------------------------
    # Conversion & display
    # ------------------------------------------------------------------

    def to_numpy(self) -> np.ndarray:
        """Return a 2-D NumPy copy of the matrix."""
        return self.data.reshape(self.rows, self.cols).copy()

    def tolist(self) -> List[List[float]]:
        return self.data.reshape(self.rows, self.cols).tolist()

    def render(self) -> str:
        return render(self)

    def __str__(self):
        return render(self)

    def __repr__(self):
        return f"Matrix(rows={self.rows}, cols={self.cols})"
