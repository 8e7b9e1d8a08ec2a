"""Tests for pcoa_biplot.config."""

import pytest
from pydantic import ValidationError

from pcoa_biplot.config import (
    BiplotConfig,
    EllipseStyle,
    FittedVectorStyle,
    ObservationDisplay,
    VariableDisplay,
    VariableStyle,
)


class TestBiplotConfig:
    def test_defaults(self):
        cfg = BiplotConfig()
        assert cfg.axes == (1, 2)
        assert cfg.observations.display == ObservationDisplay.POINTS
        assert cfg.variables.show is True
        assert cfg.variables.display == VariableDisplay.LABELS
        assert cfg.variables.arrow_length == 0.2
        assert cfg.fitted.permutations == 999
        assert cfg.fitted.color == "blue"
        assert cfg.ellipse.show is False
        assert cfg.ellipse.level == 0.95

    def test_from_document(self):
        cfg = BiplotConfig.model_validate({
            "axes": [2, 3],
            "observations": {"display": "labels", "font_face": "bold"},
            "variables": {"arrow_length": None, "rotate": 0.5},
            "ellipse": {"show": True, "level": 0.9},
        })
        assert cfg.axes == (2, 3)
        assert cfg.observations.display == ObservationDisplay.LABELS
        assert cfg.variables.arrow_length is None
        assert cfg.ellipse.level == 0.9

    @pytest.mark.parametrize("axes", [(1, 1), (0, 2), (2, -1)])
    def test_bad_axes(self, axes):
        with pytest.raises(ValidationError):
            BiplotConfig(axes=axes)

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5])
    def test_ellipse_level_bounds(self, level):
        with pytest.raises(ValidationError):
            EllipseStyle(level=level)

    def test_unknown_dash(self):
        with pytest.raises(ValidationError):
            EllipseStyle(line_dash="wiggly")

    def test_point_variables_reject_label_options(self):
        with pytest.raises(ValidationError):
            VariableStyle(display="points", size_map_offset=1.0)
        with pytest.raises(ValidationError):
            VariableStyle(display="points", rotate=1.0)

    def test_fitted_bounds(self):
        with pytest.raises(ValidationError):
            FittedVectorStyle(zoom=0)
        with pytest.raises(ValidationError):
            FittedVectorStyle(permutations=-1)
        with pytest.raises(ValidationError):
            FittedVectorStyle(arrow_length=-0.1)

    def test_empty_manual_scale(self):
        with pytest.raises(ValidationError):
            BiplotConfig(group_colors=[])

    def test_labels_rejected_for_point_display(self):
        with pytest.raises(ValidationError):
            BiplotConfig.model_validate({"observations": {"display": "points", "labels": ["a"]}})
        with pytest.raises(ValidationError):
            VariableStyle(display="points", labels=["a"])

    def test_labels_accepted_for_label_display(self):
        cfg = BiplotConfig.model_validate({
            "observations": {"display": "labels", "labels": ["a"]},
            "variables": {"labels": ["b"]},
        })
        assert cfg.observations.labels == ["a"]
        assert cfg.variables.labels == ["b"]
