"""Benchmark active-set solves on random dense convex problems."""

import time
from typing import Dict

import numpy as np

from activeqp import ActiveSetSolver, ProblemDescriptor


def _random_problem(n: int, n_ineq: int, rng: np.random.Generator):
    m_half = rng.normal(size=(n, n))
    hessian = m_half @ m_half.T + 0.5 * np.eye(n)
    x0 = rng.normal(size=n)
    a_mat = rng.normal(size=(n_ineq, n))
    b_vec = a_mat @ x0 - rng.uniform(0.1, 1.0, size=n_ineq)
    problem = ProblemDescriptor(
        H=hessian,
        c=3.0 * rng.normal(size=n),
        A=a_mat,
        b=b_vec,
        I=np.ones(n_ineq, dtype=bool),
    )
    return problem, x0


def benchmark_active_set(
    n: int,
    n_ineq: int,
    n_problems: int = 20,
    seed: int = 0,
) -> Dict[str, float]:
    """Benchmark run-to-completion solves.

    Args:
        n: Number of variables.
        n_ineq: Number of inequality rows.
        n_problems: Number of random instances to solve.
        seed: RNG seed.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    instances = [_random_problem(n, n_ineq, rng) for _ in range(n_problems)]

    iterations = 0
    start = time.perf_counter()
    for problem, x0 in instances:
        solver = ActiveSetSolver(problem, x0)
        solver.solve()
        iterations += solver.iterations
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "n_ineq": n_ineq,
        "total_time_sec": total_time,
        "time_per_solve_sec": total_time / n_problems,
        "mean_iterations": iterations / n_problems,
        "time_per_iteration_sec": total_time / max(iterations, 1),
    }


if __name__ == "__main__":
    print("Benchmarking active-set solves...")

    for n, n_ineq in [(5, 10), (20, 40), (50, 100)]:
        results = benchmark_active_set(n=n, n_ineq=n_ineq)
        print(f"Active set ({n} variables, {n_ineq} inequalities):")
        print(f"  Time per solve: {results['time_per_solve_sec']*1e3:.2f} ms")
        print(f"  Mean iterations: {results['mean_iterations']:.1f}")
        print(f"  Time per iteration: {results['time_per_iteration_sec']*1e6:.1f} us")
