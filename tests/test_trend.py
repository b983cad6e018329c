#!/usr/bin/env python3
"""
Unit tests for the trend analyzer

Tests cover:
- Classification and percentage for rising, falling and flat series
- Series too short to have a trend
- Zero first price
- Display strings and summary sentences
"""
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from crypto_dashboard.models import BEARISH, BULLISH, SIDEWAYS, PriceSample
from crypto_dashboard.trend import analyze, classify, format_percent, percent_change


def series(*prices):
    return tuple(PriceSample(date=f"d{i + 1}", price=p) for i, p in enumerate(prices))


class TestAnalyze:
    """Test analyze() on the reference scenarios"""

    def test_rising_series_is_bullish(self):
        result = analyze(series(100.0, 110.0), "bitcoin", 7)

        assert result.classification == BULLISH
        assert result.percent_change == pytest.approx(10.0)
        assert result.percent_display == "↑ +10.00%"
        assert result.summary == "BITCOIN shows bullish momentum over the selected 7 days."

    def test_falling_series_is_bearish(self):
        result = analyze(series(100.0, 90.0), "ethereum", 30)

        assert result.classification == BEARISH
        assert result.percent_change == pytest.approx(-10.0)
        assert result.percent_display == "↓ -10.00%"
        assert result.summary == "ETHEREUM shows bearish pressure over the selected 30 days."

    def test_flat_series_is_sideways(self):
        result = analyze(series(100.0, 100.0), "solana", 90)

        assert result.classification == SIDEWAYS
        assert result.percent_change == 0
        assert result.percent_display == "0%"
        assert result.summary == "SOLANA is moving sideways over the selected 90 days."

    def test_only_first_and_last_matter(self):
        result = analyze(series(100.0, 500.0, 1.0, 100.0), "bitcoin", 7)

        assert result.classification == SIDEWAYS

    @pytest.mark.parametrize("prices", [(), (42.0,)])
    def test_short_series_has_no_trend(self, prices):
        result = analyze(series(*prices), "bitcoin", 7)

        assert result.percent_change is None
        assert result.classification is None
        assert result.summary is None
        assert result.percent_display is None

    def test_zero_first_price(self):
        """A zero first price gives no percentage but still a classification"""
        result = analyze(series(0.0, 5.0), "solana", 7)

        assert result.percent_change is None
        assert result.percent_display == "N/A"
        assert result.classification == BULLISH
        assert "nan" not in result.summary.lower()
        assert "inf" not in result.summary.lower()

    def test_zero_to_zero_is_sideways(self):
        result = analyze(series(0.0, 0.0), "solana", 7)

        assert result.classification == SIDEWAYS
        assert result.percent_display == "N/A"

    def test_headline_and_dict(self):
        result = analyze(series(100.0, 112.3456), "bitcoin", 30)
        d = result.as_dict()

        assert result.headline == "BITCOIN 30-Day Trend"
        assert d["percent_change"] == 12.35
        assert d["classification"] == BULLISH


class TestClassify:
    """Classification uses exact equality for sideways"""

    def test_exact_equality_is_sideways(self):
        assert classify(0.1 + 0.2, 0.1 + 0.2) == SIDEWAYS

    def test_tiny_difference_is_not_sideways(self):
        # 0.1 + 0.2 != 0.3 in binary floating point
        assert classify(0.3, 0.1 + 0.2) == BULLISH
        assert classify(0.1 + 0.2, 0.3) == BEARISH

    @pytest.mark.parametrize("first,last", [(1.0, 2.0), (2.0, 1.0), (3.0, 3.0), (50000.0, 49999.99)])
    def test_classification_matches_sign(self, first, last):
        label = classify(first, last)
        diff = last - first

        assert label == (BULLISH if diff > 0 else BEARISH if diff < 0 else SIDEWAYS)


class TestFormatting:
    """Display strings for percentage changes"""

    def test_positive(self):
        assert format_percent(5.0) == "↑ +5.00%"

    def test_negative_has_single_minus(self):
        assert format_percent(-2.5) == "↓ -2.50%"
        assert "--" not in format_percent(-7.0)

    def test_zero(self):
        assert format_percent(0.0) == "0%"

    def test_rounds_to_zero(self):
        """Moves too small to show at two decimals read as 0%"""
        assert format_percent(0.001) == "0%"
        assert format_percent(-0.004) == "0%"
        assert format_percent(0.005000001) == "↑ +0.01%"

    def test_undefined(self):
        assert format_percent(None) == "N/A"

    def test_percent_change_full_precision(self):
        assert percent_change(3.0, 4.0) == pytest.approx(33.333333333)
        assert percent_change(0.0, 4.0) is None
