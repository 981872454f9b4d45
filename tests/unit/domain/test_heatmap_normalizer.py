"""Unit tests for normalization and share computation."""

import numpy as np
import pytest

from src.domain.services.heatmap.normalizer import (
    normalize,
    normalize_row,
    row_max,
    share_row,
)


class TestNormalizeRow:
    """Tests for dividing rows by their totals."""

    def test_divides_by_total(self):
        out = normalize_row(np.array([10.0, 5.0]), 20.0)
        assert out.tolist() == [0.5, 0.25]

    @pytest.mark.parametrize("total", [0, 0.0, None, float("nan")])
    def test_falsy_total_gives_zeros(self, total):
        out = normalize_row(np.array([10.0, 5.0]), total)
        assert out.tolist() == [0.0, 0.0]

    def test_zero_cells_stay_zero_with_negative_total(self):
        out = normalize_row(np.array([0.0, 4.0]), -8.0)
        assert out[0] == 0.0
        assert not np.signbit(out[0])
        assert out[1] == -0.5


class TestShares:
    """Tests for row maxima and shares."""

    def test_row_max_uses_absolute_values(self):
        assert row_max(np.array([0.2, -0.6, 0.4])) == pytest.approx(0.6)

    def test_row_max_of_empty_row(self):
        assert row_max(np.zeros(0)) == 0.0

    def test_shares_relative_to_row_max(self):
        shares = share_row(np.array([0.5, 0.25]))
        assert shares.tolist() == [100.0, 50.0]

    def test_negative_values_keep_sign(self):
        shares = share_row(np.array([-0.5, 0.25, 0.0]))
        assert shares.tolist() == [-100.0, 50.0, 0.0]

    def test_all_zero_row(self):
        assert share_row(np.zeros(3)).tolist() == [0.0, 0.0, 0.0]

    def test_empty_row(self):
        assert share_row(np.zeros(0)).size == 0


class TestNormalize:
    """Tests for whole-matrix normalization."""

    def test_example_row(self):
        """Row [10, 5] with total 20 -> [0.5, 0.25], shares [100, 50]."""
        normalized, shares = normalize([[10.0, 5.0]], [20.0])

        assert normalized[0].tolist() == [0.5, 0.25]
        assert shares[0].tolist() == [100.0, 50.0]

    def test_aggregated_single_column(self):
        normalized, shares = normalize([[14.0]], [14.0])

        assert normalized[0].tolist() == [1.0]
        assert shares[0].tolist() == [100.0]

    def test_largest_cell_is_exactly_hundred(self):
        """Row [14, 4] with total 18: the row maximum maps to 100, never above."""
        _, shares = normalize([[14.0, 4.0]], [18.0])

        assert shares[0][0] == 100.0
        assert np.max(np.abs(shares[0])) <= 100.0
        assert shares[0][1] == pytest.approx(100.0 * 4.0 / 14.0)

    def test_largest_negative_cell_is_exactly_minus_hundred(self):
        _, shares = normalize([[-14.0, 4.0]], [18.0])

        assert shares[0][0] == -100.0
        assert np.max(np.abs(shares[0])) <= 100.0

    def test_non_finite_cells_are_zero(self):
        normalized, shares = normalize(
            [[float("inf"), 5.0], [float("-inf"), 4.0]], [20.0, 8.0]
        )

        assert normalized[0].tolist() == [0.0, 0.25]
        assert normalized[1].tolist() == [0.0, 0.5]
        assert shares[0].tolist() == [0.0, 100.0]
        assert shares[1].tolist() == [0.0, 100.0]

    def test_none_cells_are_zero(self):
        normalized, shares = normalize([[None, 4.0]], [8.0])

        assert normalized[0].tolist() == [0.0, 0.5]
        assert shares[0].tolist() == [0.0, 100.0]

    def test_missing_total_gives_zero_row(self):
        normalized, shares = normalize([[1.0, 2.0], [3.0, 4.0]], [3.0])

        assert normalized[1].tolist() == [0.0, 0.0]
        assert shares[1].tolist() == [0.0, 0.0]

    def test_empty_row_is_kept(self):
        normalized, shares = normalize([[], [1.0]], [0.0, 1.0])

        assert normalized[0].size == 0
        assert shares[0].size == 0
        assert shares[1].tolist() == [100.0]

    def test_bounds_for_well_formed_rows(self):
        """Normalized values stay in [-1, 1], shares in [-100, 100]."""
        rng = np.random.default_rng(42)
        data = rng.uniform(-50, 100, size=(6, 12))
        # Well-formed: each total dominates the row magnitude
        totals = np.abs(data).sum(axis=1)

        normalized, shares = normalize(data.tolist(), totals.tolist())

        for n_row, s_row in zip(normalized, shares):
            assert np.all(n_row >= -1.0) and np.all(n_row <= 1.0)
            assert np.all(s_row >= -100.0) and np.all(s_row <= 100.0)
            assert np.max(np.abs(s_row)) == pytest.approx(100.0)
