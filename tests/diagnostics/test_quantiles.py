"""
Tests for plotting positions and continuous sample quantiles.

Expected values are from R 4.x:
    ppoints(n)
    quantile(x, probs, type=t)
"""

from __future__ import annotations

import numpy as np
import pytest

from pysimstats.core.exceptions import ValidationError
from pysimstats.diagnostics import midpoints, ppoints, sample_quantiles


# x = 1:5, probs = c(0, 0.25, 0.5, 0.75, 1)
R_QUANTILES_1TO5 = {
    4: [1, 1.25, 2.5, 3.75, 5],
    5: [1, 1.75, 3, 4.25, 5],
    6: [1, 1.5, 3, 4.5, 5],
    7: [1, 2, 3, 4, 5],
    8: [1, 5 / 3, 3, 13 / 3, 5],
    9: [1, 1.6875, 3, 4.3125, 5],
}

# x = c(2.1, 5.3, 8.7, 1.4, 9.2, 3.6, 7.8, 4.5, 6.9, 0.3)
# probs = c(0, 0.1, 0.25, 0.5, 0.75, 0.9, 1)
X10 = [2.1, 5.3, 8.7, 1.4, 9.2, 3.6, 7.8, 4.5, 6.9, 0.3]
P10 = [0, 0.1, 0.25, 0.5, 0.75, 0.9, 1]
R_QUANTILES_10ELEM = {
    4: [0.3, 0.3, 1.75, 4.5, 7.35, 8.7, 9.2],
    5: [0.3, 0.85, 2.1, 4.9, 7.8, 8.95, 9.2],
    6: [0.3, 0.41, 1.925, 4.9, 8.025, 9.15, 9.2],
    7: [0.3, 1.29, 2.475, 4.9, 7.575, 8.75, 9.2],
    8: [0.3, 0.7033333333333331, 2.0416666666666665, 4.9, 7.875, 9.0166666666666657, 9.2],
    9: [0.3, 0.74, 2.05625, 4.9, 7.85625, 9.0, 9.2],
}


class TestPpoints:

    def test_small_n_uses_three_eighths(self):
        np.testing.assert_allclose(
            ppoints(5),
            [0.1190476, 0.3095238, 0.5, 0.6904762, 0.8809524],
            atol=1e-7,
        )

    def test_large_n_uses_half(self):
        k = np.arange(1, 12)
        np.testing.assert_allclose(ppoints(11), (k - 0.5) / 11)

    def test_symmetric(self):
        p = ppoints(40)
        np.testing.assert_allclose(p + p[::-1], 1.0)

    def test_zero(self):
        assert len(ppoints(0)) == 0

    def test_negative(self):
        with pytest.raises(ValidationError):
            ppoints(-1)


class TestMidpoints:

    def test_values(self):
        np.testing.assert_allclose(midpoints(4), [0.125, 0.375, 0.625, 0.875])

    def test_zero(self):
        assert len(midpoints(0)) == 0


class TestSampleQuantiles:

    @pytest.mark.parametrize("qtype", sorted(R_QUANTILES_1TO5))
    def test_one_to_five(self, qtype):
        result = sample_quantiles(np.arange(1.0, 6.0), [0, 0.25, 0.5, 0.75, 1], qtype=qtype)
        np.testing.assert_allclose(result, R_QUANTILES_1TO5[qtype], rtol=1e-10)

    @pytest.mark.parametrize("qtype", sorted(R_QUANTILES_10ELEM))
    def test_ten_elements(self, qtype):
        result = sample_quantiles(X10, P10, qtype=qtype)
        np.testing.assert_allclose(result, R_QUANTILES_10ELEM[qtype], rtol=1e-10)

    def test_default_is_type_7(self):
        np.testing.assert_allclose(
            sample_quantiles([1, 2, 3, 4], [0.25, 0.5, 0.75]), [1.75, 2.5, 3.25]
        )

    def test_single_value(self):
        np.testing.assert_array_equal(sample_quantiles([3.0], [0.1, 0.9]), [3.0, 3.0])

    @pytest.mark.parametrize("qtype", [1, 2, 3, 10])
    def test_unsupported_type(self, qtype):
        with pytest.raises(ValidationError, match="4-9"):
            sample_quantiles([1.0, 2.0], [0.5], qtype=qtype)

    def test_probability_out_of_range(self):
        with pytest.raises(ValidationError, match="probs"):
            sample_quantiles([1.0, 2.0], [1.5])
