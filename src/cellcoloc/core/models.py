"""Data models for the cellcoloc core module."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from cellcoloc.measure import metrics

Point = tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """A segmented cell as the set of pixel coordinates forming its body.

    Two cells are equal when their body point sets are equal; the outline and
    centroid are derived and take no part in equality or hashing.

    Attributes:
        points: Unique ``(x, y)`` pixel coordinates of the cell body.
        outline: Ordered ``(x, y)`` boundary pixels, for re-rendering only.
        centroid: Mean ``(x, y)`` of the body coordinates.
    """

    points: frozenset[Point]
    outline: tuple[Point, ...] | None = field(default=None, compare=False)
    centroid: tuple[float, float] = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        points = frozenset((int(x), int(y)) for x, y in self.points)
        if not points:
            raise ValueError("A cell must contain at least one point")
        object.__setattr__(self, "points", points)
        if self.outline is not None:
            object.__setattr__(
                self, "outline", tuple((int(x), int(y)) for x, y in self.outline)
            )
        n = len(points)
        object.__setattr__(
            self,
            "centroid",
            (sum(x for x, _ in points) / n, sum(y for _, y in points) / n),
        )

    @property
    def area(self) -> int:
        """Number of pixels in the cell body."""
        return len(self.points)

    def pixel_indices(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(rows, cols)`` index arrays of the body in raster order."""
        ordered = sorted(self.points, key=lambda p: (p[1], p[0]))
        rows = np.fromiter((y for _, y in ordered), dtype=np.intp, count=len(ordered))
        cols = np.fromiter((x for x, _ in ordered), dtype=np.intp, count=len(ordered))
        return rows, cols

    def sample(self, image: np.ndarray) -> np.ndarray:
        """Intensity values of a 2D (Y, X) image under the cell body."""
        rows, cols = self.pixel_indices()
        return image[rows, cols]


@dataclass(frozen=True)
class ChannelCellAnalysis:
    """Intensity statistics of one cell measured on one channel.

    Attributes:
        area: Pixel count of the cell body.
        mean: Mean intensity under the body.
        median: Median intensity under the body.
        min: Minimum intensity under the body.
        max: Maximum intensity under the body.
        raw_integrated_density: Sum of intensities under the body.
    """

    area: int
    mean: float
    median: float
    min: float
    max: float
    raw_integrated_density: float

    @classmethod
    def from_cell(cls, cell: Cell, image: np.ndarray) -> ChannelCellAnalysis:
        """Measure ``cell`` on a 2D (Y, X) intensity image."""
        values = cell.sample(image)
        return cls(
            area=cell.area,
            mean=metrics.mean_intensity(values),
            median=metrics.median_intensity(values),
            min=metrics.min_intensity(values),
            max=metrics.max_intensity(values),
            raw_integrated_density=metrics.integrated_intensity(values),
        )


@dataclass(frozen=True)
class ImageMetadata:
    """File-identifying information attached to a result by the caller."""

    file_name: str
    width: int | None = None
    height: int | None = None
    channel_count: int | None = None


@dataclass(frozen=True)
class TransductionResult:
    """Outcome of a colocalization analysis for one image.

    Attributes:
        target_cell_count: Number of cells found in the morphology channel.
        overlapping_cells: Morphology cells classified transduction-positive,
            in extraction order.
        overlapping_analyses: Transduction-channel statistics, one per
            overlapping cell and in the same order.
        metadata: Caller-supplied file information.
    """

    target_cell_count: int
    overlapping_cells: tuple[Cell, ...]
    overlapping_analyses: tuple[ChannelCellAnalysis, ...]
    metadata: ImageMetadata

    def __post_init__(self) -> None:
        if len(self.overlapping_cells) != len(self.overlapping_analyses):
            raise ValueError(
                "overlapping_cells and overlapping_analyses must have the same length, "
                f"got {len(self.overlapping_cells)} and {len(self.overlapping_analyses)}"
            )
        if len(self.overlapping_cells) > self.target_cell_count:
            raise ValueError(
                f"{len(self.overlapping_cells)} overlapping cells exceed "
                f"target_cell_count={self.target_cell_count}"
            )

    @property
    def transduced_cell_count(self) -> int:
        return len(self.overlapping_cells)

    @property
    def transduction_efficiency(self) -> float:
        """Percentage of morphology cells that are transduction-positive."""
        return metrics.transduction_efficiency(self.transduced_cell_count, self.target_cell_count)
