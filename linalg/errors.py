# --- Purpose: Exception types raised by the matrix library. ---


class MatrixError(Exception):
    """Base class for recoverable matrix errors."""


class ShapeMismatch(MatrixError, ValueError):
    """
    Raised when operand shapes are incompatible, or when the rows handed to
    a constructor do not match the declared shape.
    """
    def __init__(self, message, left=None, right=None):
        super().__init__(message)
        self.left = left
        self.right = right


class IndexOutOfBounds(MatrixError, IndexError):
    """Raised when an element index lies outside the matrix."""
    def __init__(self, shape, index):
        rows, cols = shape
        i, j = index
        super().__init__(
            f"index out of bounds: the shape is ({rows}, {cols}) "
            f"but the index is ({i}, {j})."
        )
        self.shape = shape
        self.index = index


class InvalidShape(MatrixError, ValueError):
    """Raised when a factory is given dimensions that cannot describe a matrix."""


class PreconditionViolation(AssertionError):
    """
    Raised on caller errors that have no meaningful result, such as raising
    a non-square matrix to a power. Not a MatrixError: it is not meant to be
    recovered from.
    """
