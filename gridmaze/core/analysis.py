from collections import deque
from typing import Dict, Optional, Set, Tuple

import numpy as np

from gridmaze.core.grid import CellType, Grid, Position


def walkable_mask(grid: Grid) -> np.ndarray:
    types = grid.to_numpy()
    return (types != CellType.WALL) & (types != CellType.OBSTACLE)


def count_walkable(grid: Grid) -> int:
    return int(np.count_nonzero(walkable_mask(grid)))


def neighbor_degrees(grid: Grid) -> np.ndarray:
    """Number of walkable 4-neighbours of every cell (0 for non-walkable cells)."""
    mask = walkable_mask(grid)
    padded = np.pad(mask, 1).astype(np.uint8)
    degrees = (
        padded[:-2, 1:-1] + padded[2:, 1:-1] + padded[1:-1, :-2] + padded[1:-1, 2:]
    )
    return np.where(mask, degrees, 0)


def reachable_from(grid: Grid, start) -> Set[Position]:
    """Flood fill over walkable cells."""
    start = Position(*start)
    if not grid.is_walkable(start):
        return set()

    seen = {start}
    queue = deque([start])
    while queue:
        pos = queue.popleft()
        for neighbor in grid.walkable_neighbors(pos):
            if neighbor.position not in seen:
                seen.add(neighbor.position)
                queue.append(neighbor.position)
    return seen


def is_connected(grid: Grid, start=None) -> bool:
    """True when every walkable cell is reachable from start (default: grid.start)."""
    if start is None:
        start = grid.start
    if start is None:
        return False
    total = count_walkable(grid)
    return total > 0 and len(reachable_from(grid, start)) == total


def is_solvable(grid: Grid, start=None, end=None) -> bool:
    start = grid.start if start is None else Position(*start)
    end = grid.end if end is None else Position(*end)
    if start is None or end is None:
        return False
    return end in reachable_from(grid, start)


def logical_cell_count(grid: Grid) -> int:
    return ((grid.rows - 1) // 2) * ((grid.cols - 1) // 2)


def count_connections(grid: Grid) -> int:
    """
    Carved walls between logical cells.
    In the doubled layout those are exactly the walkable cells with odd row+col.
    """
    mask = walkable_mask(grid)
    rr, cc = np.indices(mask.shape)
    return int(np.count_nonzero(mask & ((rr + cc) % 2 == 1)))


def is_perfect(grid: Grid) -> bool:
    """Spanning tree check: connected, and exactly one connection fewer than logical cells."""
    return is_connected(grid) and count_connections(grid) == logical_cell_count(grid) - 1


def farthest_from(grid: Grid, start) -> Tuple[Optional[Position], int]:
    start = Position(*start)
    if not grid.is_walkable(start):
        return None, -1

    dist = {start: 0}
    queue = deque([start])
    far, far_d = start, 0
    while queue:
        pos = queue.popleft()
        d = dist[pos]
        if d > far_d:
            far, far_d = pos, d
        for neighbor in grid.walkable_neighbors(pos):
            if neighbor.position not in dist:
                dist[neighbor.position] = d + 1
                queue.append(neighbor.position)
    return far, far_d


def farthest_pair(grid: Grid) -> Optional[Tuple[Position, Position]]:
    """
    Two cells far apart by route length (double sweep).
    Exact on perfect mazes, where the walkable cells form a tree.
    """
    seed = grid.start if grid.start is not None and grid.is_walkable(grid.start) else None
    if seed is None:
        walkable = grid.walkable_positions()
        if not walkable:
            return None
        seed = walkable[0]

    a, _ = farthest_from(grid, seed)
    b, _ = farthest_from(grid, a)
    return a, b


def calculate_stats(grid: Grid) -> Dict[str, object]:
    total = grid.rows * grid.cols
    walkable = count_walkable(grid)
    degrees = neighbor_degrees(grid)
    mask = walkable_mask(grid)

    dead_ends = int(np.count_nonzero(mask & (degrees == 1)))
    corridors = int(np.count_nonzero(mask & (degrees == 2)))
    junctions = int(np.count_nonzero(mask & (degrees >= 3)))

    return {
        "rows": grid.rows,
        "cols": grid.cols,
        "total_cells": total,
        "walkable": walkable,
        "walls": total - walkable - len(grid.obstacles),
        "obstacles": len(grid.obstacles),
        "dead_ends": dead_ends,
        "corridors": corridors,
        "junctions": junctions,
        "walkable_percent": (walkable / total) * 100 if total > 0 else 0,
        "connections": count_connections(grid),
        "connected": is_connected(grid),
    }
