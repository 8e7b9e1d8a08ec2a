"""Tests for pcoa_biplot.analysis.envfit."""

import numpy as np
import pandas as pd
import pytest

from pcoa_biplot.analysis.envfit import envfit


class TestEnvfit:
    def test_exact_linear_variable(self, ordination):
        pts = ordination.points
        env = pd.DataFrame({"grad": 2 * pts[:, 0] + pts[:, 1]})
        fit = envfit(ordination, env, permutations=0)
        assert fit.r2["grad"] == pytest.approx(1.0)
        direction = np.array([2.0, 1.0]) / np.sqrt(5.0)
        np.testing.assert_allclose(fit.arrows.loc["grad"].to_numpy(), direction, atol=1e-8)
        assert fit.p_values is None

    def test_arrows_are_unit_length(self, ordination, envs):
        fit = envfit(ordination, envs, permutations=0)
        lengths = np.sqrt((fit.arrows.to_numpy() ** 2).sum(axis=1))
        np.testing.assert_allclose(lengths, 1.0)
        assert list(fit.arrows.columns) == ["Dim1", "Dim2"]

    def test_scaled_vectors(self, ordination, envs):
        fit = envfit(ordination, envs, permutations=0)
        scaled = fit.scaled_vectors(zoom=2.5)
        expected = fit.arrows.to_numpy() * np.sqrt(fit.r2.to_numpy())[:, None] * 2.5
        np.testing.assert_allclose(scaled.to_numpy(), expected)

    def test_permutation_p_values(self, ordination, envs):
        fit = envfit(ordination, envs, permutations=199, seed=1)
        assert fit.p_values["depth"] == pytest.approx(1 / 200)
        assert ((fit.p_values > 0) & (fit.p_values <= 1)).all()

    def test_seed_makes_p_values_repeatable(self, ordination, envs):
        first = envfit(ordination, envs, permutations=99, seed=3)
        second = envfit(ordination, envs, permutations=99, seed=3)
        pd.testing.assert_series_equal(first.p_values, second.p_values)

    def test_non_numeric_columns_skipped(self, ordination, envs):
        env = envs.assign(site=["a"] * len(envs))
        fit = envfit(ordination, env, permutations=0)
        assert "site" not in fit.arrows.index

    def test_row_mismatch(self, ordination, envs):
        with pytest.raises(ValueError):
            envfit(ordination, envs.iloc[:10], permutations=0)

    def test_selected_axes(self, ordination):
        pts = ordination.points
        env = pd.DataFrame({"g": pts[:, 2]})
        fit = envfit(ordination, env, axes=(1, 3), permutations=0)
        np.testing.assert_allclose(fit.arrows.loc["g"].to_numpy(), [0.0, 1.0], atol=1e-8)

    def test_to_frame(self, ordination, envs):
        fit = envfit(ordination, envs, permutations=19, seed=2)
        frame = fit.to_frame()
        assert list(frame.columns) == ["Dim1", "Dim2", "r2", "p_value"]
        assert list(frame.index) == ["depth", "temp", "noise"]
        pd.testing.assert_series_equal(frame["r2"], fit.r2)

    def test_to_frame_without_permutations(self, ordination, envs):
        frame = envfit(ordination, envs, permutations=0).to_frame()
        assert list(frame.columns) == ["Dim1", "Dim2", "r2"]
