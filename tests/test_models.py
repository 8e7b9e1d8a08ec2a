"""Tests for pcoa_biplot.models."""

import numpy as np
import pytest

from pcoa_biplot.models.ordination import OrdinationResult


class TestOrdinationResult:
    def test_default_sample_ids(self):
        result = OrdinationResult(points=np.zeros((3, 2)), eigenvalues=[2.0, 1.0, 1.0])
        assert result.sample_ids == ["1", "2", "3"]
        np.testing.assert_allclose(result.explained_variance(), [0.5, 0.25, 0.25])

    def test_sample_id_mismatch(self):
        with pytest.raises(ValueError):
            OrdinationResult(points=np.zeros((3, 2)), eigenvalues=[1.0, 1.0], sample_ids=["a"])

    def test_dict_round_trip(self, ordination):
        ordination.metadata["distance"] = "braycurtis"
        data = ordination.to_dict()
        assert data["sample_ids"][:2] == ["S1", "S2"]
        assert data["metadata"] == {"distance": "braycurtis"}

        restored = OrdinationResult.from_dict(data)
        np.testing.assert_array_equal(restored.points, ordination.points)
        np.testing.assert_array_equal(restored.eigenvalues, ordination.eigenvalues)
        assert restored.sample_ids == ordination.sample_ids
        assert restored.metadata == ordination.metadata

    def test_from_dict_defaults(self):
        restored = OrdinationResult.from_dict({"points": [[0.0, 1.0], [1.0, 0.0]], "eigenvalues": [1.0, 0.5]})
        assert restored.sample_ids == ["1", "2"]
        assert restored.metadata == {}
