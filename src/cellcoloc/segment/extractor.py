"""Connected-component labeling of a segmented mask into Cell objects."""

from __future__ import annotations

import logging

import numpy as np
from scipy import ndimage as ndi
from skimage.measure import regionprops

from cellcoloc.core.models import Cell

logger = logging.getLogger(__name__)

# Moore neighbourhood as (d_row, d_col), clockwise starting from west.
_NEIGHBOURS = (
    (0, -1), (-1, -1), (-1, 0), (-1, 1),
    (0, 1), (1, 1), (1, 0), (1, -1),
)
_NEIGHBOUR_INDEX = {offset: i for i, offset in enumerate(_NEIGHBOURS)}

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def trace_boundary(region: np.ndarray) -> list[tuple[int, int]]:
    """Trace the outer boundary of a single 8-connected region.

    Uses Moore-neighbour tracing, clockwise from the region's top-left pixel,
    stopping when the start pixel is re-entered towards the second pixel.

    Args:
        region: 2D bool array containing exactly one connected region.

    Returns:
        Ordered ``(row, col)`` boundary pixels without repeating the start.
        Empty if the region has no pixels.
    """
    padded = np.pad(region.astype(bool), 1)
    rows, cols = np.nonzero(padded)
    if rows.size == 0:
        return []

    start = (int(rows[0]), int(cols[0]))
    contour = [start]
    current = start
    # The pixel west of the top-left pixel is always background.
    backtrack = 0
    second: tuple[int, int] | None = None

    while True:
        for step in range(1, 9):
            direction = (backtrack + step) % 8
            d_row, d_col = _NEIGHBOURS[direction]
            candidate = (current[0] + d_row, current[1] + d_col)
            if padded[candidate]:
                break
        else:
            # Isolated pixel
            break

        previous_dir = (direction - 1) % 8
        p_row, p_col = _NEIGHBOURS[previous_dir]
        previous = (current[0] + p_row, current[1] + p_col)

        if second is None:
            second = candidate
        elif current == start and candidate == second:
            contour.pop()
            break

        backtrack = _NEIGHBOUR_INDEX[(previous[0] - candidate[0], previous[1] - candidate[1])]
        contour.append(candidate)
        current = candidate

    return [(r - 1, c - 1) for r, c in contour]


class CellExtractor:
    """Materialize each connected foreground component as a Cell.

    Components are 8-connected and numbered in raster-scan order of their
    first pixel, which fixes the order of the returned cells. No size
    filtering is applied.
    """

    def extract(self, mask: np.ndarray) -> list[Cell]:
        """Convert a segmented mask to a list of cells.

        Args:
            mask: 2D array (Y, X); non-zero pixels are foreground.

        Returns:
            One Cell per connected component. Empty if there is no foreground.
        """
        labels, count = ndi.label(mask > 0, structure=_EIGHT_CONNECTED)
        if count == 0:
            return []

        cells: list[Cell] = []
        for prop in regionprops(labels):
            coords = prop.coords
            if len(coords) == 0:
                logger.debug("Skipping empty component %d", prop.label)
                continue

            min_row, min_col, _, _ = prop.bbox
            outline = [
                (int(c + min_col), int(r + min_row))
                for r, c in trace_boundary(prop.image)
            ]
            # regionprops coords are (row, col) = (y, x)
            points = frozenset((int(c), int(r)) for r, c in coords)
            cells.append(Cell(points=points, outline=tuple(outline)))

        logger.debug("Extracted %d cells", len(cells))
        return cells
