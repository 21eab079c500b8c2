"""
Occupancy grid: tracks which one-inch cells of a layer are taken.

The grid is a boolean ``numpy`` array of ``ceil(length) × ceil(width)`` cells.
Pieces occupy ``ceil(piece_length) × ceil(piece_width)`` cells, so fractional
dimensions are clipped up to the next cell boundary and placement coordinates
are always whole inches.

Usage:
    grid = OccupancyGrid(config)
    pos = grid.find_position(24.0, 20.0)   # first free (x, y) or None
    grid.mark(*pos, 24.0, 20.0)
"""

import math
from typing import Optional, Tuple

import numpy as np

from pallet_planner.config import PalletConfig

# Float noise absorbed when sizing pieces; far below any real dimension excess
SPAN_EPSILON = 1e-9


class OccupancyGrid:
    """
    Occupancy map of one layer.

    Positions are scanned in bottom-left order: x ascending, then y
    ascending, and the first fully free window wins.
    """

    __slots__ = ("config", "cells")

    def __init__(self, config: PalletConfig) -> None:
        self.config: PalletConfig = config
        self.cells: np.ndarray = np.zeros(
            (config.grid_length, config.grid_width), dtype=bool,
        )

    # ── Coordinate conversion ────────────────────────────────────────────

    def _span(self, extent: float) -> int:
        """Cells covered by a piece extent."""
        return max(1, math.ceil(extent - SPAN_EPSILON))

    def _scan_count(self, footprint: float, extent: float) -> int:
        """Number of integer start positions along one axis (0 if it cannot fit)."""
        slack = footprint - extent + self.config.tolerance
        if slack < 0:
            return 0
        return math.floor(slack) + 1

    # ── Queries ──────────────────────────────────────────────────────────

    def find_position(self, length: float, width: float) -> Optional[Tuple[int, int]]:
        """
        First free (x, y) for a ``length × width`` piece, or None.

        Window occupancy is computed for every start position at once from a
        summed-area table of the grid.
        """
        nx = self._scan_count(self.config.footprint_length, length)
        ny = self._scan_count(self.config.footprint_width, width)
        if nx == 0 or ny == 0:
            return None

        gl, gw = self.cells.shape
        summed = np.zeros((gl + 1, gw + 1), dtype=np.int32)
        summed[1:, 1:] = self.cells.cumsum(axis=0).cumsum(axis=1)

        xs = np.arange(nx)
        ys = np.arange(ny)
        xe = np.minimum(xs + self._span(length), gl)
        ye = np.minimum(ys + self._span(width), gw)

        taken = (
            summed[np.ix_(xe, ye)]
            - summed[np.ix_(xs, ye)]
            - summed[np.ix_(xe, ys)]
            + summed[np.ix_(xs, ys)]
        )
        free = np.argwhere(taken == 0)
        if free.size == 0:
            return None
        x, y = free[0]
        return int(x), int(y)

    def is_free(self, x: int, y: int, length: float, width: float) -> bool:
        """True if no cell under the piece at (x, y) is occupied."""
        region = self.cells[x:x + self._span(length), y:y + self._span(width)]
        return not bool(region.any())

    @property
    def occupied_cells(self) -> int:
        return int(self.cells.sum())

    # ── Mutation ─────────────────────────────────────────────────────────

    def mark(self, x: int, y: int, length: float, width: float) -> None:
        """Mark the cells under a piece placed at (x, y) as occupied."""
        self.cells[x:x + self._span(length), y:y + self._span(width)] = True

    def __repr__(self) -> str:
        return (
            f"OccupancyGrid({self.cells.shape[0]}x{self.cells.shape[1]}, "
            f"occupied={self.occupied_cells})"
        )
