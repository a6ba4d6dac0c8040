"""
Microbenchmark: field grid and field-line tracing vs number of sources.
Run:
  python benchmarks/bench_field.py
"""
import time

import numpy as np

from physics_lab.field import SourceCollection, SourceKind, field_grid, trace_field_lines

KINDS = list(SourceKind)


def build(n: int) -> SourceCollection:
    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    sources = SourceCollection()
    for i in range(n):
        kind = KINDS[i % len(KINDS)]
        pos = rng.uniform(0.1, 0.9, size=2)
        sources.add(kind, pos, orientation=float(rng.uniform(0.0, 2 * np.pi)))
    return sources


def run(n: int, repeats: int = 5):
    sources = build(n)

    # warmup
    field_grid(sources, steps=10)

    t0 = time.perf_counter()
    for _ in range(repeats):
        field_grid(sources, steps=20)
    t1 = time.perf_counter()
    for _ in range(repeats):
        lines = trace_field_lines(sources)
    t2 = time.perf_counter()

    n_points = sum(len(line) for line in lines)
    return (t1 - t0) / repeats, (t2 - t1) / repeats, len(lines), n_points


if __name__ == "__main__":
    for n in [1, 5, 10, 25, 50]:
        grid, trace, n_lines, n_points = run(n)
        print(f"N={n:3d}  grid={1e3*grid:8.3f} ms  trace={1e3*trace:8.3f} ms  "
              f"lines={n_lines:4d}  points={n_points:6d}")
