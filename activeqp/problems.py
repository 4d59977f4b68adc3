"""Small worked quadratic programs with known solutions."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .core import ProblemDescriptor


def equality_constrained_example() -> Tuple[ProblemDescriptor, np.ndarray]:
    """
    Three variables, two equality rows (Nocedal & Wright, Example 16.2).

    Returns the problem and the feasible start ``[3, 0, 0]``; the optimum is
    ``[2, -1, 1]``.
    """
    problem = ProblemDescriptor(
        H=np.array([[6.0, 2.0, 1.0], [2.0, 5.0, 2.0], [1.0, 2.0, 4.0]]),
        c=np.array([-8.0, -3.0, -3.0]),
        A=np.array([[1.0, 0.0, 1.0], [0.0, 1.0, 1.0]]),
        b=np.array([3.0, 0.0]),
        I=np.array([False, False]),
    )
    return problem, np.array([3.0, 0.0, 0.0])


def inequality_constrained_example() -> Tuple[ProblemDescriptor, np.ndarray]:
    """
    Two variables, five inequality rows (Nocedal & Wright, Example 16.4).

    Returns the problem and the vertex start ``[2, 0]``; the optimum is
    ``[1.4, 1.7]``.
    """
    problem = ProblemDescriptor(
        H=np.array([[2.0, 0.0], [0.0, 2.0]]),
        c=np.array([-2.0, -5.0]),
        A=np.array(
            [
                [1.0, -2.0],
                [-1.0, -2.0],
                [-1.0, 2.0],
                [1.0, 0.0],
                [0.0, 1.0],
            ]
        ),
        b=np.array([-2.0, -6.0, -2.0, 0.0, 0.0]),
        I=np.ones(5, dtype=bool),
    )
    return problem, np.array([2.0, 0.0])


def box_projection_example(
    target: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
) -> Tuple[ProblemDescriptor, np.ndarray]:
    """
    Euclidean projection of ``target`` onto the box ``[lower, upper]``.

    Minimizes ``½ ||x - target||²`` with rows ``x_i >= lower_i`` followed by
    ``-x_i >= -upper_i``. The start is the box midpoint and the optimum is
    ``np.clip(target, lower, upper)``.
    """
    target = np.asarray(target, dtype=float).reshape(-1)
    lower = np.asarray(lower, dtype=float).reshape(-1)
    upper = np.asarray(upper, dtype=float).reshape(-1)
    n = target.shape[0]
    if lower.shape != (n,) or upper.shape != (n,):
        raise ValueError("Bounds must match the dimension of target")
    if np.any(lower > upper):
        raise ValueError("lower must not exceed upper")

    eye = np.eye(n)
    problem = ProblemDescriptor(
        H=eye,
        c=-target,
        A=np.vstack([eye, -eye]),
        b=np.concatenate([lower, -upper]),
        I=np.ones(2 * n, dtype=bool),
    )
    return problem, 0.5 * (lower + upper)


__all__ = [
    "equality_constrained_example",
    "inequality_constrained_example",
    "box_projection_example",
]
