"""
Unit tests for backend kernel operations.
Tests the correctness of the computation kernels behind the Matrix operators.
"""

import unittest
import os
import sys

import numpy as np

# Add the parent directory to the path so we can import the linalg module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from linalg.core import Matrix
from linalg import backend
from linalg.errors import ShapeMismatch


def _reference_multiply(A, B):
    """Textbook triple loop with sequential accumulation."""
    out = [[0.0] * B.cols for _ in range(A.rows)]
    for i in range(A.rows):
        for j in range(B.cols):
            el = 0.0
            for k in range(A.cols):
                el += A.get(i, k) * B.get(k, j)
            out[i][j] = el
    return Matrix.from_rows(A.rows, B.cols, out)


class TestBackendKernels(unittest.TestCase):
    """Test cases for backend computation kernels."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        rng = np.random.default_rng(42)
        self.data_A = rng.random((6, 4))
        self.data_B = rng.random((6, 4))
        self.data_A_matmul = rng.random((6, 4))
        self.data_B_matmul = rng.random((4, 5))

        self.A = Matrix.from_numpy(self.data_A)
        self.B = Matrix.from_numpy(self.data_B)
        self.A_matmul = Matrix.from_numpy(self.data_A_matmul)
        self.B_matmul = Matrix.from_numpy(self.data_B_matmul)

    def test_add_kernel(self):
        """Test the element-wise addition kernel."""
        C = backend.add(self.A, self.B)

        self.assertEqual(C.shape(), (6, 4))
        np.testing.assert_array_equal(C.to_numpy(), self.data_A + self.data_B)

    def test_add_does_not_mutate_operands(self):
        before_A, before_B = self.A.copy(), self.B.copy()
        backend.add(self.A, self.B)
        self.assertEqual(self.A, before_A)
        self.assertEqual(self.B, before_B)

    def test_add_shape_mismatch_reports_both_shapes(self):
        """Test that addition of different shapes reports left then right shape."""
        with self.assertRaises(ShapeMismatch) as ctx:
            backend.add(self.A, self.B_matmul)

        self.assertEqual(ctx.exception.left, (6, 4))
        self.assertEqual(ctx.exception.right, (4, 5))
        message = str(ctx.exception)
        self.assertLess(message.index("(6, 4)"), message.index("(4, 5)"))

    def test_multiply_kernel(self):
        """Test the matrix multiplication kernel against a triple loop."""
        C = backend.multiply(self.A_matmul, self.B_matmul)

        self.assertEqual(C.shape(), (6, 5))
        self.assertEqual(C, _reference_multiply(self.A_matmul, self.B_matmul))
        np.testing.assert_allclose(C.to_numpy(), self.data_A_matmul @ self.data_B_matmul)

    def test_multiply_sequential_accumulation(self):
        """Test that each element is summed in k = 0..K-1 order."""
        # (0 + 1e16) + 1 rounds back to 1e16, so the 1 is lost before -1e16 cancels
        A = Matrix.from_rows(1, 3, [[1e16, 1.0, -1e16]])
        B = Matrix.from_scalar(3, 1, 1.0)

        C = backend.multiply(A, B)
        self.assertEqual(C.get(0, 0), 0.0)
        self.assertEqual(C, _reference_multiply(A, B))

    def test_multiply_shape_mismatch(self):
        """Test that incompatible inner dimensions raise ShapeMismatch."""
        with self.assertRaises(ShapeMismatch) as ctx:
            backend.multiply(self.A_matmul, self.A_matmul)

        self.assertEqual(ctx.exception.left, (6, 4))
        self.assertEqual(ctx.exception.right, (6, 4))
        self.assertIn("LHS: (6, 4), RHS: (6, 4)", str(ctx.exception))

    def test_multiply_empty_inner_dimension(self):
        """Test that a K = 0 product is a zero matrix of the outer shape."""
        C = backend.multiply(Matrix.zeros(3, 0), Matrix.zeros(0, 2))
        self.assertEqual(C, Matrix.zeros(3, 2))

    def test_multiply_result_owns_storage(self):
        C = backend.multiply(self.A_matmul, Matrix.identity(4))
        self.assertFalse(np.shares_memory(C.data, self.A_matmul.data))

    def test_scale_kernel(self):
        """Test scalar multiplication."""
        C = backend.scale(self.A, 15.0)
        np.testing.assert_array_equal(C.to_numpy(), self.data_A * 15.0)
        self.assertEqual(C.shape(), self.A.shape())

    def test_transpose_kernel(self):
        """Test transposition for square, rectangular and degenerate shapes."""
        for shape in [(3, 3), (2, 5), (1, 4), (4, 1), (0, 3), (3, 0)]:
            with self.subTest(shape=shape):
                data = np.arange(shape[0] * shape[1], dtype=np.float64).reshape(shape)
                T = backend.transpose(Matrix.from_numpy(data))
                self.assertEqual(T.shape(), (shape[1], shape[0]))
                np.testing.assert_array_equal(T.to_numpy(), data.T)

    def test_transpose_does_not_share_storage(self):
        """Test that row and column vectors are copied, not viewed."""
        row = Matrix.from_rows(1, 3, [[1., 2., 3.]])
        col = backend.transpose(row)
        col.set(0, 0, 50.0)
        self.assertEqual(row.get(0, 0), 1.0)

    def test_is_scalar(self):
        self.assertTrue(backend.is_scalar(2))
        self.assertTrue(backend.is_scalar(2.5))
        self.assertTrue(backend.is_scalar(np.float32(1.5)))
        self.assertFalse(backend.is_scalar(True))
        self.assertFalse(backend.is_scalar("2"))
        self.assertFalse(backend.is_scalar(Matrix.identity(1)))


if __name__ == '__main__':
    unittest.main()
