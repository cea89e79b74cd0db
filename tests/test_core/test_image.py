"""Tests for MultiChannelImage and core exceptions."""

from __future__ import annotations

import numpy as np
import pytest

from cellcoloc.core.exceptions import (
    ChannelNotFoundError,
    ColocalizationError,
    InvalidConfigurationError,
)
from cellcoloc.core.image import MultiChannelImage


class TestMultiChannelImage:
    def test_2d_is_single_channel(self):
        image = MultiChannelImage(np.zeros((5, 7), dtype=np.uint8))
        assert image.channel_count == 1
        assert (image.height, image.width) == (5, 7)

    def test_channel_axis_moved_first(self):
        data = np.zeros((5, 7, 3), dtype=np.uint16)
        data[..., 2] = 9
        image = MultiChannelImage(data, channel_axis=-1)
        assert image.channel_count == 3
        assert image.channel(2).shape == (5, 7)
        assert image.intensity(2, x=6, y=4) == 9.0

    def test_data_is_read_only_copy(self):
        data = np.zeros((2, 4, 4), dtype=np.uint8)
        image = MultiChannelImage(data)
        data[0, 0, 0] = 1
        assert image.channel(0)[0, 0] == 0
        with pytest.raises(ValueError):
            image.channel(0)[0, 0] = 5

    def test_invalid_shape_raises(self):
        with pytest.raises(ValueError, match="2D"):
            MultiChannelImage(np.zeros((2, 2, 2, 2)))

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty"):
            MultiChannelImage(np.zeros((0, 4)))

    @pytest.mark.parametrize("channel", [-1, 2, 10])
    def test_missing_channel(self, channel):
        image = MultiChannelImage(np.zeros((2, 4, 4), dtype=np.uint8))
        with pytest.raises(ChannelNotFoundError) as exc_info:
            image.channel(channel)
        assert exc_info.value.channel == channel
        assert exc_info.value.channel_count == 2


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(ChannelNotFoundError, ColocalizationError)
        assert issubclass(InvalidConfigurationError, ColocalizationError)

    def test_channel_not_found_message(self):
        err = ChannelNotFoundError(3, 1)
        assert str(err) == "Channel not found: 3 (image has 1 channel)"

    def test_invalid_configuration_detail(self):
        err = InvalidConfigurationError("radius must be >= 1")
        assert err.detail == "radius must be >= 1"
        assert "radius must be >= 1" in str(err)
