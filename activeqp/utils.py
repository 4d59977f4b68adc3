"""
Numerical helper routines for the active-set solver.

The KKT systems assembled by the solver may be singular whenever ``H`` is only
positive semidefinite or the working-set rows are linearly dependent. The
helpers here therefore never raise on rank deficiency: they return
minimum-norm least-squares solutions instead.
"""

from __future__ import annotations

import numpy as np
import scipy.linalg


def generalized_solve(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """
    Solve ``M z = r`` through the Moore-Penrose pseudo-inverse of ``M``.

    ``np.linalg.pinv`` builds the pseudo-inverse from a singular value
    decomposition, so the result is the minimum-norm least-squares solution
    when ``M`` is singular or rank-deficient.
    """

    return np.linalg.pinv(matrix) @ rhs


def orthogonal_lstsq(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """
    Least-squares solution of the (generally rectangular) system ``M z = r``.

    Uses LAPACK ``gelsy``, a complete orthogonal factorization built on QR
    with column pivoting, which handles rank-deficient ``M``.
    """

    if matrix.shape[1] == 0:
        return np.zeros(0)
    sol, *_ = scipy.linalg.lstsq(matrix, rhs, lapack_driver="gelsy")
    return sol


def quadratic_objective(hessian: np.ndarray, linear: np.ndarray, x: np.ndarray) -> float:
    """Return ``½ xᵀ H x + cᵀ x``."""

    x = np.asarray(x, dtype=float)
    return float(0.5 * x @ (hessian @ x) + linear @ x)


def is_positive_semidefinite(matrix: np.ndarray, tol: float = 1e-10) -> bool:
    """
    Return True if ``matrix`` is symmetric with no eigenvalue below ``-tol``.

    The tolerance is scaled by the largest eigenvalue magnitude so that the
    check is invariant to uniform scaling of the objective.
    """

    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    if matrix.size == 0:
        return True
    if not np.allclose(matrix, matrix.T, atol=tol, rtol=0.0):
        return False
    eigvals = np.linalg.eigvalsh(matrix)
    scale = max(1.0, float(np.max(np.abs(eigvals))))
    return bool(eigvals.min() >= -tol * scale)


__all__ = [
    "generalized_solve",
    "orthogonal_lstsq",
    "quadratic_objective",
    "is_positive_semidefinite",
]
