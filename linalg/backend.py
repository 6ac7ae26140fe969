# --- Purpose: Contains the computation kernels behind the Matrix operators. ---

import logging
import numbers

import numpy as np

from .config import DTYPE
from .errors import ShapeMismatch, PreconditionViolation

logger = logging.getLogger(__name__)


def is_scalar(value) -> bool:
    """True for real numbers usable as a multiplication factor (bool excluded)."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def add(A, B):
    """Element-wise addition: C = A + B."""
    if A.rows != B.rows or A.cols != B.cols:
        raise ShapeMismatch(
            "Matrices of different shapes cannot be added together. "
            f"Left{A.shape()}, Right{B.shape()}",
            left=A.shape(), right=B.shape(),
        )
    logger.debug(f"add: {A.shape()} + {B.shape()}")
    return type(A)._wrap(A.rows, A.cols, A.data + B.data)


def multiply(A, B):
    """
    Matrix multiplication: C = A @ B.

    Each element of C is accumulated in plain k = 0..K-1 order, one rank-1
    update per k, so results do not depend on how a BLAS library would
    reorder the reduction.
    """
    if A.cols != B.rows:
        raise ShapeMismatch(
            "LHS cols must be same as RHS rows to multiply. "
            f"LHS: {A.shape()}, RHS: {B.shape()}",
            left=A.shape(), right=B.shape(),
        )
    logger.debug(f"multiply: {A.shape()} @ {B.shape()}")

    rows, K, cols = A.rows, A.cols, B.cols
    left = A.data.reshape(rows, K)
    right = B.data.reshape(K, cols)

    # 1. Zero-initialised accumulator for the whole result
    out = np.zeros((rows, cols), dtype=DTYPE)

    # 2. Loop through the inner dimension k and accumulate
    for k in range(K):
        out += np.outer(left[:, k], right[k, :])

    return type(A)._wrap(rows, cols, out.flatten())


def scale(A, scalar):
    """Multiplies every element of A by a scalar."""
    logger.debug(f"scale: {A.shape()} * {scalar}")
    return type(A)._wrap(A.rows, A.cols, A.data * DTYPE(scalar))


def transpose(A):
    """Returns a new matrix of shape (cols, rows) with result(i, j) = A(j, i)."""
    grid = A.data.reshape(A.rows, A.cols)
    return type(A)._wrap(A.cols, A.rows, grid.T.flatten())


def power(A, exponent):
    """
    Raises a square matrix to a non-negative integer power using
    exponentiation by squaring (O(log exponent) multiplications).

    Raises:
        PreconditionViolation: if A is not square, or the exponent is
            negative or not an integer.
    """
    if A.rows != A.cols:
        raise PreconditionViolation("Can only raise square matrices to a power.")
    if not isinstance(exponent, numbers.Integral) or isinstance(exponent, bool):
        raise PreconditionViolation(
            f"Exponent must be an integer, got {type(exponent).__name__}."
        )
    exponent = int(exponent)
    if exponent == 0:
        return type(A).identity(A.rows)
    if exponent < 0:
        raise PreconditionViolation("Can only raise matrices to a non-negative power.")

    logger.debug(f"power: {A.shape()} ** {exponent}")
    return _power_by_squaring(A, exponent)


def _power_by_squaring(base, exponent):
    if exponent == 0:
        return type(base).identity(base.rows)
    half = _power_by_squaring(multiply(base, base), exponent // 2)
    if exponent % 2 == 0:
        return half
    return multiply(base, half)
