"""
Example: downhill simplex minimisation

Minimises a shifted quadratic bowl and the Rosenbrock function with the
Nelder-Mead solver and prints the per-iteration moves of a short run.
"""

import numpy as np

from ledmapping import Move, NelderMeadSolver, nelder_mead


def bowl(x):
    return (x[0] - 3.0) ** 2 + (x[1] - 4.0) ** 2


def rosenbrock(x):
    return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2


def example_bowl():
    print("=" * 60)
    print("Example 1: Quadratic bowl centred at (3, 4)")
    print("=" * 60)

    solver = NelderMeadSolver(bowl, step=1.0, epsilon=1e-6, report=True)
    result = solver.find_minimum(np.array([0.0, 0.0]), max_iterations=200)
    print(f"Best point: {result.x}")
    print(f"Best cost: {result.fun:.3e}")
    print(f"Iterations: {result.nit} ({result.nfev} evaluations)")

    counts = {move: 0 for move in Move}
    for report in solver.reports:
        counts[report.move] += 1
    print("Moves: " + ", ".join(f"{m.value}={n}" for m, n in counts.items()))
    print()


def example_rosenbrock():
    print("=" * 60)
    print("Example 2: Rosenbrock valley")
    print("=" * 60)

    result = nelder_mead(rosenbrock, [-1.2, 1.0], step=0.5, epsilon=1e-10, maxiter=2000)
    print(f"Status: {result.message}")
    print(f"Best point: {result.x}")
    print(f"Best cost: {result.fun:.3e}")
    print()


if __name__ == "__main__":
    example_bowl()
    example_rosenbrock()
    print("Simplex examples completed")
