import heapq
import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import List, Optional, Sequence, Tuple

from gridmaze.core.events import AlgorithmStep, StepRecorder
from gridmaze.core.grid import Grid, Position
from gridmaze.core.path import Path, concatenate, manhattan

logger = logging.getLogger(__name__)


class Solver(ABC):
    name = ""
    optimal = False
    time_complexity = ""
    space_complexity = ""

    def __init__(self):
        # Stats from the most recent search
        self.visited_count = 0

    def is_optimal(self) -> bool:
        return self.optimal

    @abstractmethod
    def search(self, grid: Grid, start: Position, end: Position,
               recorder: Optional[StepRecorder]) -> bool:
        """
        Runs the search over freshly reset cells, leaving parent links behind.
        Returns True once end has been taken off the frontier.
        """
        pass

    def find_path(self, grid: Grid, start, end) -> Path:
        return self._run(grid, start, end, None)

    def find_path_with_steps(self, grid: Grid, start, end) -> List[AlgorithmStep]:
        recorder = StepRecorder()
        self._run(grid, start, end, recorder)
        return recorder.steps

    def _run(self, grid: Grid, start, end, recorder: Optional[StepRecorder]) -> Path:
        t0 = time.perf_counter()
        grid.reset_search_state()
        self.visited_count = 0

        start, end = Position(*start), Position(*end)
        if not (grid.in_bounds(start) and grid.in_bounds(end)):
            logger.warning("%s: endpoints %s -> %s outside %dx%d grid",
                           self.name, tuple(start), tuple(end), grid.rows, grid.cols)
            found = False
        elif not (grid.is_walkable(start) and grid.is_walkable(end)):
            logger.debug("%s: endpoint not walkable", self.name)
            found = False
        else:
            found = self.search(grid, start, end, recorder)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        if not found:
            logger.debug("%s: no path %s -> %s (visited %d)",
                         self.name, tuple(start), tuple(end), self.visited_count)
            if recorder is not None:
                recorder.log_complete(end, (), "No path found")
            return Path.empty(elapsed_ms)

        path = Path(self.reconstruct(grid, start, end), None, elapsed_ms)
        logger.debug("%s: path of length %d (visited %d)", self.name, path.length, self.visited_count)
        if recorder is not None:
            recorder.log_complete(end, path.positions, f"Path found! Length: {path.length}, Cost: {path.cost}")
        return path

    def reconstruct(self, grid: Grid, start: Position, end: Position) -> List[Position]:
        positions = []
        curr = end
        while curr is not None:
            positions.append(curr)
            if curr == start:
                break
            curr = grid.get_cell(curr).parent
        positions.reverse()
        return positions

    def find_path_multi_target(self, grid: Grid, start, targets: Sequence) -> Path:
        """
        Greedy tour: repeatedly head to the nearest waypoint not yet reached.
        Any unreachable waypoint fails the whole tour.
        """
        remaining = [Position(*t) for t in targets]
        if not remaining:
            return Path.empty()

        current = Position(*start)
        legs = []
        while remaining:
            choice = self.pick_next(grid, current, remaining)
            if choice is None:
                logger.debug("%s: multi-target tour aborted at %s", self.name, tuple(current))
                return Path.empty(sum(leg.elapsed_ms for leg in legs))
            target, leg = choice
            legs.append(leg)
            remaining.remove(target)
            current = target
        return concatenate(legs)

    def pick_next(self, grid: Grid, current: Position,
                  remaining: List[Position]) -> Optional[Tuple[Position, Path]]:
        """Nearest by route length; None when any waypoint is unreachable."""
        best = None
        for target in remaining:
            leg = self.find_path(grid, current, target)
            if leg.is_empty():
                return None
            if best is None or leg.length < best[1].length:
                best = (target, leg)
        return best

    def __repr__(self):
        return f"{type(self).__name__}()"


class BFS(Solver):
    name = "Breadth-First Search (BFS)"
    optimal = True
    time_complexity = "O(V + E)"
    space_complexity = "O(V)"

    def search(self, grid, start, end, recorder):
        start_cell = grid.get_cell(start)
        start_cell.visited = True
        start_cell.g_cost = 0
        self.visited_count = 1
        if recorder is not None:
            recorder.log_visit(start, (start,), f"BFS started at {tuple(start)}")

        queue = deque([start_cell])
        step = 0
        while queue:
            current = queue.popleft()
            step += 1
            if recorder is not None:
                recorder.log_explore(current.position, (), f"Step {step}: exploring {tuple(current.position)}")

            if current.position == end:
                return True

            for neighbor in grid.walkable_neighbors(current.position):
                # Mark on enqueue so a cell never sits in the queue twice
                if not neighbor.visited:
                    neighbor.visited = True
                    neighbor.parent = current.position
                    neighbor.g_cost = current.g_cost + 1
                    self.visited_count += 1
                    queue.append(neighbor)
                    if recorder is not None:
                        recorder.log_visit(neighbor.position, (), f"Discovered {tuple(neighbor.position)}")
        return False


class DFS(Solver):
    """Stack-based depth-first search. Finds a path, not necessarily the shortest."""

    name = "Depth-First Search (DFS)"
    optimal = False
    time_complexity = "O(V + E)"
    space_complexity = "O(V)"

    def search(self, grid, start, end, recorder):
        start_cell = grid.get_cell(start)
        start_cell.visited = True
        start_cell.g_cost = 0
        self.visited_count = 1
        if recorder is not None:
            recorder.log_visit(start, (start,), f"DFS started at {tuple(start)}")

        stack = [start_cell]
        step = 0
        while stack:
            current = stack.pop()
            step += 1
            if recorder is not None:
                recorder.log_explore(current.position, (), f"Step {step}: exploring {tuple(current.position)}")

            if current.position == end:
                return True

            for neighbor in grid.walkable_neighbors(current.position):
                if not neighbor.visited:
                    neighbor.visited = True
                    neighbor.parent = current.position
                    neighbor.g_cost = current.g_cost + 1
                    self.visited_count += 1
                    stack.append(neighbor)
                    if recorder is not None:
                        recorder.log_visit(neighbor.position, (), f"Discovered {tuple(neighbor.position)}")
        return False


class AStar(Solver):
    name = "A* Search (A-Star)"
    optimal = True
    time_complexity = "O(E log V)"
    space_complexity = "O(V)"

    def heuristic(self, a, b):
        return manhattan(a, b)

    def search(self, grid, start, end, recorder):
        start_cell = grid.get_cell(start)
        start_cell.g_cost = 0
        start_cell.h_cost = self.heuristic(start, end)
        self.visited_count = 1
        if recorder is not None:
            recorder.log_visit(start, (start,), f"A* started at {tuple(start)} (h={start_cell.h_cost})")

        # Priority Queue: (f, h, row, col). h then coordinates break ties deterministically.
        open_set = [(start_cell.f_cost, start_cell.h_cost, start.row, start.col)]
        step = 0
        while open_set:
            f, h, r, c = heapq.heappop(open_set)
            current = grid.cells[r][c]

            # Closed cells (visited) are never re-expanded. An entry whose f no longer
            # matches the cell was superseded by a cheaper one pushed later.
            if current.visited or f != current.f_cost:
                continue

            step += 1
            if recorder is not None:
                recorder.log_explore(
                    current.position, (),
                    f"Step {step}: exploring {(r, c)} (g={current.g_cost}, h={h}, f={f})",
                )

            if current.position == end:
                return True

            current.visited = True
            for neighbor in grid.walkable_neighbors(current.position):
                if neighbor.visited:
                    continue

                new_g = current.g_cost + 1
                if new_g < neighbor.g_cost:
                    if neighbor.g_cost == neighbor.INFINITY:
                        self.visited_count += 1
                    neighbor.parent = current.position
                    neighbor.g_cost = new_g
                    neighbor.h_cost = self.heuristic(neighbor.position, end)
                    heapq.heappush(open_set, (neighbor.f_cost, neighbor.h_cost,
                                              neighbor.position.row, neighbor.position.col))
                    if recorder is not None:
                        recorder.log_visit(neighbor.position, (),
                                           f"Added to open set: {tuple(neighbor.position)} (f={neighbor.f_cost})")
        return False

    def pick_next(self, grid, current, remaining):
        """Nearest by heuristic distance; only the chosen leg is searched."""
        target = min(remaining, key=lambda t: self.heuristic(current, t))
        leg = self.find_path(grid, current, target)
        if leg.is_empty():
            return None
        return target, leg
