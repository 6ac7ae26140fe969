"""
linalg: a small dense-matrix library.

Matrices hold float64 elements in flat row-major storage and support
element access, equality, addition, scalar and matrix multiplication,
transpose, integer powers by repeated squaring and aligned text rendering.
"""

from .core import Matrix
from .errors import (
    MatrixError,
    ShapeMismatch,
    IndexOutOfBounds,
    InvalidShape,
    PreconditionViolation,
)
from .observability import configure_logging, get_profiler

__version__ = "0.1.0"

__all__ = [
    "Matrix",
    "MatrixError",
    "ShapeMismatch",
    "IndexOutOfBounds",
    "InvalidShape",
    "PreconditionViolation",
    "configure_logging",
    "get_profiler",
]
