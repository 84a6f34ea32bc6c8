import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.algo.registry import GENERATOR_NAMES, create_generator, create_solver
from gridmaze.core.obstacles import ObstacleManager

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove solver names here to include/exclude them from the race.
# ==========================================
ENABLED_SOLVERS = [
    "bfs",
    "dfs",
    "astar",
]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--rows", type=int, default=100, help="Logical rows")
    parser.add_argument("--cols", type=int, default=100, help="Logical columns")
    parser.add_argument("--algo", type=str, default="backtracker", choices=GENERATOR_NAMES, help="Generator")
    parser.add_argument("--obstacles", type=int, default=0, help="Random obstacles")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.rows}x{args.cols} | Generator: {args.algo} | Obstacles: {args.obstacles}")
    print(f"Solvers: {', '.join(ENABLED_SOLVERS)}")
    print("-" * 50)

    # 1. Generate Maze
    t0 = time.perf_counter()
    grid = create_generator(args.algo, seed=args.seed).generate(args.rows, args.cols)
    if args.obstacles > 0:
        placed = ObstacleManager(seed=args.seed).add_random_obstacles(grid, args.obstacles)
        print(f"Placed {len(placed)} obstacles.")
    print(f"Generation Complete in {time.perf_counter() - t0:.4f}s.")
    print("-" * 50)

    # 2. Race Loop
    results = []
    for name in ENABLED_SOLVERS:
        print(f"Running {name.upper()}...", end="", flush=True)
        # Solvers reset the grid's search state themselves
        solver = create_solver(name)

        t_start = time.perf_counter()
        path = solver.find_path(grid, grid.start, grid.end)
        duration = time.perf_counter() - t_start

        print(f" Done ({duration:.4f}s) | Path: {path.length}")
        results.append({
            "name": name,
            "time": duration,
            "path": path.length,
            "visited": solver.visited_count,
        })

    # 3. Leaderboard
    print("=" * 60)
    print(f"{'RANK':<5} | {'ALGORITHM':<20} | {'TIME (s)':<10} | {'PATH':<8} | {'VISITED':<8}")
    print("-" * 60)

    results.sort(key=lambda x: x['time'])
    for i, res in enumerate(results):
        print(f"{i+1:<5} | {res['name'].upper():<20} | {res['time']:<10.4f} | {res['path']:<8} | {res['visited']:<8}")
    print("=" * 60)


if __name__ == "__main__":
    run_benchmark()
