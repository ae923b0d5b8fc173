"""
Calendar Date Builder Tests
===========================

INVARIANTS TESTED:
1. Small years keep their literal value (no epoch reinterpretation)
2. The token route rejects impossible dates, the direct route rolls over
3. Out-of-range components yield None, never NaT
4. Negative years are supported
"""

import math
from datetime import datetime, timezone

import numpy as np
import pytest

from timeline_core.contracts.dates import DateParsingConfig, ParsedDateComponents
from timeline_core.observability import DiagnosticLevel, DiagnosticLog
from timeline_core.temporal.calendar import (
    build_date, calendar_token, civil_day, civil_day_number, from_epoch_ms, instant_year, to_epoch_ms,
    uses_token_route, DIRECT_STRATEGY, TOKEN_STRATEGY, select_strategy,
)
from timeline_core.temporal.parsing import parse_date


CONFIG = DateParsingConfig()


def components(year, month=0, day=1, hour=0) -> ParsedDateComponents:
    return ParsedDateComponents(
        year=year, month=month, day=day, hour=hour,
        original_date_string='', normalized_date_string='', readable_date_string=''
    )


def build(raw: str):
    return build_date(parse_date(raw, CONFIG))


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestConstruction:

    def test_modern_date(self):
        assert build('2025-07-25') == np.datetime64('2025-07-25T00:00', 'ms')

    def test_hour(self):
        assert build('2025-07-25-13') == np.datetime64('2025-07-25T13:00', 'ms')

    @pytest.mark.parametrize('raw, year', [('0001', 1), ('0050', 50), ('0099', 99), ('1850', 1850), ('1900', 1900)])
    def test_small_years_are_literal(self, raw, year):
        """Year 1 stays year 1, not 1901."""
        assert instant_year(build(raw)) == year

    def test_year_one_is_january_first(self):
        assert build('0001') == np.datetime64('0001-01-01', 'ms')

    def test_negative_year(self):
        instant = build_date(components(-500))
        assert instant is not None
        assert instant_year(instant) == -500

    def test_negative_year_rolls_over(self):
        """Day 30 of February in year -50 lands on March 2nd."""
        instant = build_date(components(-50, month=1, day=30, hour=5))
        march_first = build_date(components(-50, month=2, day=1, hour=5))
        assert instant_year(instant) == -50
        assert instant - march_first == np.timedelta64(1, 'D')

    def test_civil_day_number(self):
        assert civil_day_number(1970, 0, 1) == 0
        assert civil_day_number(2000, 2, 1) == 11017
        assert civil_day_number(1969, 11, 31) == -1

    def test_civil_day_range(self):
        with pytest.raises(OverflowError):
            civil_day(10 ** 7, 0, 1)

    def test_token_route_rejects_impossible_day(self):
        assert build('1800-02-30') is None

    def test_direct_route_rolls_over(self):
        """After 1900 an overflowing day moves into the next month."""
        assert build('2001-02-30') == np.datetime64('2001-03-02', 'ms')

    def test_leap_day_on_token_route(self):
        assert build('1896-02-29') == np.datetime64('1896-02-29', 'ms')


# =============================================================================
# RANGE CHECKS
# =============================================================================

class TestRangeChecks:

    @pytest.mark.parametrize('kwargs', [
        {'year': 0},
        {'year': 2020, 'month': 12},
        {'year': 2020, 'month': -1},
        {'year': 2020, 'day': 0},
        {'year': 2020, 'day': 32},
        {'year': 2020, 'hour': 24},
        {'year': 2020, 'hour': -1},
    ])
    def test_invalid_component(self, kwargs):
        assert build_date(components(**kwargs)) is None

    def test_none_components(self):
        assert build_date(None) is None

    def test_non_integer_component(self):
        assert build_date(components(2020, month=1.5)) is None

    def test_far_future_is_rejected(self):
        """Beyond the representable range the result is None, not NaT."""
        assert build_date(components(10 ** 9)) is None


# =============================================================================
# STRATEGY SELECTION
# =============================================================================

class TestStrategySelection:

    @pytest.mark.parametrize('year, token', [(0, True), (1, True), (1900, True), (1901, False), (-5, False), (2025, False)])
    def test_year_predicate(self, year, token):
        assert uses_token_route(year) is token

    def test_select_strategy(self):
        assert select_strategy(1800) is TOKEN_STRATEGY
        assert select_strategy(2000) is DIRECT_STRATEGY

    def test_calendar_token_is_zero_padded(self):
        assert calendar_token(5, 0, 1, 0) == '0005-01-01-00'

    def test_strategy_is_recorded(self):
        log = DiagnosticLog(DiagnosticLevel.VERBOSE)
        build_date(parse_date('1800', CONFIG), log)
        entries = log.get_entries(component='calendar')
        assert entries[-1].context_dict()['strategy'] == 'token'


# =============================================================================
# EPOCH CONVERSION
# =============================================================================

class TestEpochConversion:

    def test_datetime(self):
        assert to_epoch_ms(datetime(1970, 1, 2)) == 86_400_000

    def test_aware_datetime(self):
        assert to_epoch_ms(datetime(1970, 1, 2, tzinfo=timezone.utc)) == 86_400_000

    @pytest.mark.parametrize('value', [None, True, np.datetime64('NaT'), math.inf, math.nan, 'x', 10 ** 400])
    def test_unusable_values(self, value):
        assert math.isnan(to_epoch_ms(value))

    def test_from_epoch_ms_non_finite(self):
        assert np.isnat(from_epoch_ms(math.inf))
