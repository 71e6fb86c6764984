"""Simplex model and vertex evaluation for the Nelder-Mead search."""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, List, Sequence

import numpy as np

from .core import DELTA, Array, Objective, Vertex


class Evaluator:
    """Turn raw points into vertices by calling the cost function.

    Every call evaluates the cost function exactly once and increments
    ``nfev``. Exceptions raised by the cost function propagate unchanged.
    """

    def __init__(self, fun: Objective) -> None:
        self.fun = fun
        self.nfev = 0

    def __call__(self, point: Array) -> Vertex:
        position = np.array(point, dtype=float)
        position.setflags(write=False)
        value = float(self.fun(position))
        self.nfev += 1
        return Vertex(position=position, value=value)


def _sort_key(vertex: Vertex) -> float:
    return vertex.value


class Simplex:
    """N+1 vertices in N-dimensional space, kept sorted by ascending cost."""

    def __init__(self, vertices: Sequence[Vertex]) -> None:
        if len(vertices) < 2:
            raise ValueError("a simplex needs at least two vertices")
        dim = vertices[0].position.size
        if len(vertices) != dim + 1:
            raise ValueError(
                f"a simplex in {dim} dimensions needs {dim + 1} vertices, got {len(vertices)}"
            )
        self._vertices: List[Vertex] = sorted(vertices, key=_sort_key)

    @classmethod
    def from_start(cls, evaluate: Evaluator, x0: Array, step: float) -> "Simplex":
        """Build the starting simplex: ``x0`` plus one point per axis at distance ``step``."""
        x0 = np.asarray(x0, dtype=float)
        vertices = [evaluate(x0)]
        for axis in np.eye(x0.size):
            vertices.append(evaluate(x0 + step * axis))
        return cls(vertices)

    @property
    def dim(self) -> int:
        return len(self._vertices) - 1

    @property
    def best(self) -> Vertex:
        return self._vertices[0]

    @property
    def second_worst(self) -> Vertex:
        return self._vertices[-2]

    @property
    def worst(self) -> Vertex:
        return self._vertices[-1]

    @property
    def spread(self) -> float:
        """Cost difference between the worst and the best vertex."""
        return self.worst.value - self.best.value

    @property
    def values(self) -> Array:
        return np.array([v.value for v in self._vertices])

    @property
    def points(self) -> Array:
        return np.array([v.position for v in self._vertices])

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __getitem__(self, index: int) -> Vertex:
        return self._vertices[index]

    def centroid(self) -> Array:
        """Mean position of all vertices except the worst."""
        return np.mean([v.position for v in self._vertices[:-1]], axis=0)

    def replace_worst(self, vertex: Vertex) -> None:
        """Drop the worst vertex and insert ``vertex`` at its sorted position.

        The new vertex is placed after any existing vertices with the same cost.
        """
        del self._vertices[-1]
        index = bisect_right([v.value for v in self._vertices], vertex.value)
        self._vertices.insert(index, vertex)

    def shrink(self, evaluate: Evaluator, factor: float = DELTA) -> None:
        """Move every vertex except the best toward the best and re-sort.

        Costs N evaluations.
        """
        best = self.best.position
        shrunk = [self.best]
        for vertex in self._vertices[1:]:
            shrunk.append(evaluate(best + factor * (vertex.position - best)))
        self._vertices = sorted(shrunk, key=_sort_key)

    def is_sorted(self) -> bool:
        values = self.values
        return bool(np.all(values[:-1] <= values[1:]))


__all__ = ["Evaluator", "Simplex"]
