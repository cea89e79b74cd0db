"""Tests for TransductionParameters and CellDiameterRange."""

from __future__ import annotations

import pytest

from cellcoloc.coloc.parameters import CellDiameterRange, TransductionParameters
from cellcoloc.core.exceptions import InvalidConfigurationError
from cellcoloc.preprocess.thresholding import BernsenAlgorithm, ThresholdLocality


class TestCellDiameterRange:

    @pytest.mark.parametrize("text, expected", [
        ("0-30", (0.0, 30.0)),
        ("8.5-40", (8.5, 40.0)),
        (" 5 - 12 ", (5.0, 12.0)),
    ])
    def test_parse(self, text, expected):
        parsed = CellDiameterRange.parse(text)
        assert (parsed.smallest, parsed.largest) == expected

    @pytest.mark.parametrize("text", ["30", "a-b", "-5-10", ""])
    def test_parse_malformed(self, text):
        with pytest.raises(InvalidConfigurationError):
            CellDiameterRange.parse(text)

    def test_smallest_above_largest(self):
        with pytest.raises(InvalidConfigurationError, match="exceeds"):
            CellDiameterRange(20, 10)

    def test_str(self):
        assert str(CellDiameterRange()) == "0-30"
        assert str(CellDiameterRange(8.5, 40)) == "8.5-40"

    def test_accepts_equivalent_diameter(self):
        size = CellDiameterRange(2, 4)
        assert not size.accepts(1)  # diameter ~1.13
        assert size.accepts(8)  # diameter ~3.19
        assert not size.accepts(20)  # diameter ~5.05


class TestTransductionParameters:

    def test_defaults(self):
        params = TransductionParameters()
        assert params.target_channel == 0
        assert params.transduced_channel == 1
        assert params.cell_diameter_range == CellDiameterRange(0, 30)
        assert params.local_threshold_radius == 20
        assert params.gaussian_blur_sigma == 3.0
        assert params.should_subtract_background
        assert params.threshold_locality == "local"
        assert params.local_threshold_algorithm == "otsu"

    def test_string_range_parsed(self):
        params = TransductionParameters(cell_diameter_range="5-25")
        assert params.cell_diameter_range == CellDiameterRange(5, 25)

    def test_names_normalized(self):
        params = TransductionParameters(
            threshold_locality="GLOBAL", local_threshold_algorithm="Bernsen",
        )
        assert params.threshold_locality == "global"
        assert params.local_threshold_algorithm == "bernsen"

    @pytest.mark.parametrize("kwargs", [
        {"target_channel": -1},
        {"transduced_channel": 1.5},
        {"local_threshold_radius": 0},
        {"gaussian_blur_sigma": 0},
        {"threshold_locality": "regional"},
        {"local_threshold_algorithm": "sauvola"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            TransductionParameters(**kwargs)

    def test_to_preprocessing_parameters(self):
        params = TransductionParameters(
            cell_diameter_range="0-40",
            local_threshold_algorithm="bernsen",
            bernsen_contrast_threshold=25.0,
            local_threshold_radius=12,
        )
        pre = params.to_preprocessing_parameters()
        assert pre.largest_cell_diameter == 40.0
        assert pre.threshold_locality is ThresholdLocality.LOCAL
        assert pre.local_threshold_algorithm == BernsenAlgorithm(contrast_threshold=25.0)
        assert pre.threshold_radius == 12

    def test_dict_round_trip(self):
        params = TransductionParameters(cell_diameter_range="3-18", niblack_k=0.4)
        data = params.to_dict()
        assert data["cell_diameter_range"] == "3-18"
        assert TransductionParameters.from_dict(data) == params

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidConfigurationError, match="unknown parameter"):
            TransductionParameters.from_dict({"colour": "green"})

    def test_from_dict_range_mapping(self):
        params = TransductionParameters.from_dict(
            {"cell_diameter_range": {"smallest": 2, "largest": 9}}
        )
        assert params.cell_diameter_range == CellDiameterRange(2, 9)

    def test_with_overrides_skips_none(self):
        params = TransductionParameters(local_threshold_radius=7)
        updated = params.with_overrides(local_threshold_radius=None, transduced_channel=2)
        assert updated.local_threshold_radius == 7
        assert updated.transduced_channel == 2
