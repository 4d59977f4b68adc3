"""
Example: Primal active-set method on small quadratic programs

Solves the worked problems shipped in ``activeqp.problems`` and prints the
iteration history recorded by the solver: working sets, step lengths and
iterates, followed by a KKT check of the final point.
"""

import numpy as np

from activeqp import (
    ActiveSetSolver,
    SolverOptions,
    Status,
    active_set_qp,
    box_projection_example,
    equality_constrained_example,
    inequality_constrained_example,
    kkt_residuals,
)


def _print_history(solver: ActiveSetSolver) -> None:
    steps = solver.step_lengths
    for k, (x, working_set) in enumerate(zip(solver.points, solver.working_sets), start=1):
        step = steps[k - 1] if k - 1 < len(steps) else None
        step_text = "-" if step is None else f"alpha={step.alpha:.4f} blocking={list(step.blocking)}"
        print(f"  k={k}: x={np.round(x, 6)} W={list(working_set)} {step_text}")


def example_equality_constrained():
    """Example: equality rows only, solved in a single Newton-like step."""
    print("=" * 60)
    print("Example 1: Equality-Constrained QP")
    print("=" * 60)

    problem, x0 = equality_constrained_example()
    solver = ActiveSetSolver(problem, x0)
    x_star = solver.solve()
    _print_history(solver)
    print(f"Optimal point: {np.round(x_star, 6)}")
    print(f"Objective: {problem.objective(x_star):.6f}")
    print(f"Iterations: {solver.iterations}")
    print()


def example_inequality_constrained():
    """Example: five inequality rows, constraints enter and leave the working set."""
    print("=" * 60)
    print("Example 2: Inequality-Constrained QP")
    print("=" * 60)

    problem, x0 = inequality_constrained_example()
    solver = ActiveSetSolver(problem, x0)
    x_star = solver.solve()
    _print_history(solver)
    print(f"Optimal point: {np.round(x_star, 6)}")
    print(f"Multipliers: {np.round(solver.multipliers, 6)}")

    residuals = kkt_residuals(problem, x_star, solver.multipliers)
    print(f"Dual residual: {residuals['dual']:.2e}")
    print(f"Complementarity: {residuals['complementary']:.2e}")
    print()


def example_step_by_step():
    """Example: bounded execution through advance() with a caller-side cap."""
    print("=" * 60)
    print("Example 3: Single-Step Execution")
    print("=" * 60)

    problem, x0 = inequality_constrained_example()
    solver = ActiveSetSolver(problem, x0)
    cap = 3
    while not solver.terminated and solver.iterations < cap:
        solver.advance()
        print(f"  after iteration {solver.iterations}: x={np.round(solver.points[-1], 6)}")
    print(f"Terminated within {cap} iterations: {solver.terminated}")

    result = active_set_qp(problem, x0, SolverOptions(max_iter=cap))
    print(f"Driver status with max_iter={cap}: {result.status}")
    print()


def example_box_projection():
    """Example: projection onto a box."""
    print("=" * 60)
    print("Example 4: Box Projection")
    print("=" * 60)

    target = np.array([1.5, -0.5, 0.2])
    lower = np.zeros(3)
    upper = np.array([1.0, 1.0, 0.5])
    problem, x0 = box_projection_example(target, lower, upper)
    result = active_set_qp(problem, x0)
    print(f"Status: {result.status}")
    if result.status == Status.OPTIMAL:
        print(f"Projection: {np.round(result.x, 6)}")
        print(f"Expected (clipped target): {np.clip(target, lower, upper)}")
        print(f"Iterations: {result.nit}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("activeqp - Active-Set Quadratic Programming Examples")
    print("=" * 60 + "\n")

    example_equality_constrained()
    example_inequality_constrained()
    example_step_by_step()
    example_box_projection()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
