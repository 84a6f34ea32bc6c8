import argparse
import logging
import os
import random
import sys
import time

# Ensure project root is in path so we can import 'gridmaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze import config
from gridmaze.algo.registry import (
    GENERATOR_NAMES, SOLVER_NAMES, SessionConfig, build_session, create_solver,
)
from gridmaze.core import analysis
from gridmaze.core.grid import CellType, type_to_char
from gridmaze.io.text import MazeTextCodec


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT
    )


def dimension(value: str) -> int:
    n = int(value)
    if not 1 <= n <= config.MAX_DIMENSION:
        raise argparse.ArgumentTypeError(f"must be between 1 and {config.MAX_DIMENSION}")
    return n


def render_with_path(grid, path) -> str:
    """Text form of the grid with the route drawn as '.' over open cells."""
    on_path = set(path.positions)
    lines = []
    for row in grid.cells:
        lines.append("".join(
            '.' if cell.type == CellType.PATH and cell.position in on_path else type_to_char(cell.type)
            for cell in row
        ))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="gridmaze: perfect maze generator and solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(sub):
        sub.add_argument("--rows", type=dimension, default=config.DEFAULT_ROWS, help="Logical rows")
        sub.add_argument("--cols", type=dimension, default=config.DEFAULT_COLS, help="Logical columns")
        sub.add_argument("--seed", type=int, default=None, help="Random Seed")
        sub.add_argument("--algo", type=str, default=config.DEFAULT_GENERATOR, choices=GENERATOR_NAMES,
                         help="Generation Algorithm")
        sub.add_argument("--obstacles", type=int, default=0, help="Random obstacles to place after generation")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze and print it")
    add_common(gen_parser)
    gen_parser.add_argument("--stats", action="store_true", help="Print maze statistics")
    gen_parser.add_argument("--steps", action="store_true", help="Print the generation step trace")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a maze and solve it")
    add_common(solve_parser)
    solve_parser.add_argument("--solver", type=str, default=config.DEFAULT_SOLVER, choices=SOLVER_NAMES,
                              help="Path finding algorithm")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Race every solver on one maze")
    add_common(bench_parser)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("gridmaze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    solver_name = getattr(args, "solver", config.DEFAULT_SOLVER)
    # One seed per run, so --steps traces the same maze that was printed
    seed = args.seed if args.seed is not None else random.randrange(2**32)
    logger.debug(f"Seed: {seed}")
    session = build_session(SessionConfig(generator=args.algo, solver=solver_name, seed=seed))

    try:
        grid = session.generate(args.rows, args.cols)
    except ValueError as e:
        parser.error(str(e))

    if args.obstacles > 0:
        placed = session.add_random_obstacles(args.obstacles)
        logger.info(f"Placed {len(placed)} obstacles")

    if args.command == "generate":
        print(MazeTextCodec.dumps(grid), end="")

        if args.stats:
            for key, value in session.statistics().items():
                print(f"{key:<18} {value}")

        if args.steps:
            for step in session.generator.generate_with_steps(args.rows, args.cols):
                print(f"{step.type.name:<10} {tuple(step.position)} {step.description}")

    elif args.command == "solve":
        path = session.find_path()
        print(render_with_path(grid, path))
        if path.is_empty():
            print("No path found.")
        else:
            print(f"Path Length: {path.length} | Cost: {path.cost} | Time: {path.elapsed_ms:.3f} ms")

    elif args.command == "benchmark":
        print(f"\n{'ALGORITHM':<28} | {'TIME (ms)':<10} | {'PATH LEN':<10} | {'VISITED':<10} | {'OPTIMAL':<7}")
        print("-" * 76)

        for name in SOLVER_NAMES:
            solver = create_solver(name)
            t_start = time.perf_counter()
            path = solver.find_path(grid, grid.start, grid.end)
            duration = (time.perf_counter() - t_start) * 1000.0
            print(f"{solver.name:<28} | {duration:<10.3f} | {path.length:<10} | "
                  f"{solver.visited_count:<10} | {str(solver.is_optimal()):<7}")

        logger.info(f"Connected: {analysis.is_connected(grid)}, perfect: {analysis.is_perfect(grid)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
