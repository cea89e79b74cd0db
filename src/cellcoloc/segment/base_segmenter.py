"""Abstract interface for separating touching cells in a binary mask."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class BaseSegmenter(ABC):
    """Abstract interface for region-separation backends.

    Concrete implementations (e.g., WatershedSegmenter) must implement
    ``segment()``.
    """

    @abstractmethod
    def segment(self, mask: np.ndarray) -> None:
        """Split merged foreground regions of a mask, in place.

        Args:
            mask: 2D ``uint8`` array (Y, X), 255 = foreground, 0 = background.
                On return, touching cells are separated by background lines.
        """
