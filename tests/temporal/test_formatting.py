"""
Date Formatting Tests
"""

import pytest

from timeline_core.temporal.formatting import format_date, sort_timeline_dates


# =============================================================================
# FORMAT TOKENS
# =============================================================================

class TestFormatDate:

    def test_numeric_tokens(self):
        assert format_date('2025-07-25', 'YYYY-MM-DD') == '2025-07-25'

    def test_month_name(self):
        assert format_date('2025-07', 'MMM YYYY') == 'July 2025'

    def test_abbreviated_month_and_short_year(self):
        assert format_date('1999-12', 'M YY') == 'Dec 99'

    def test_weekday_and_ordinal(self):
        assert format_date('2025-07-04', 'DDDD, MMM D YYYY') == 'Friday, July 4th 2025'

    def test_abbreviated_weekday(self):
        assert format_date('1970-01-01', 'DDD') == 'Thu'

    def test_weekday_before_epoch(self):
        assert format_date('1969-07-20', 'DDDD') == 'Sunday'

    def test_weekday_outside_calendar_range(self):
        assert format_date('99999999-01-01', 'DDD YYYY').strip() == '99999999'

    def test_hour(self):
        assert format_date('2025-07-04-09', 'YYYY-MM-DD H') == '2025-07-04 09:00'

    def test_missing_hour_drops_hour_tokens(self):
        assert format_date('2025', 'YYYY HH') == '2025'

    @pytest.mark.parametrize('day, expected', [('1', '1st'), ('2', '2nd'), ('3', '3rd'), ('11', '11th'), ('22', '22nd'), ('31', '31st')])
    def test_ordinals(self, day, expected):
        assert format_date(f'2025-01-{day}', 'D') == expected

    @pytest.mark.parametrize('raw', ['', 'not a date', '2025/07/25', '2025-07-25-01-02'])
    def test_invalid_date_string_raises(self, raw):
        with pytest.raises(ValueError):
            format_date(raw, 'YYYY')


# =============================================================================
# ORDERING
# =============================================================================

class TestSortTimelineDates:

    DATES = ['2020-01', '-0050', '-0100', '1999']

    def test_ascending_places_older_negative_first(self):
        assert sort_timeline_dates(self.DATES) == ['-0100', '-0050', '1999', '2020-01']

    def test_descending(self):
        assert sort_timeline_dates(self.DATES, ascending=False) == ['2020-01', '1999', '-0050', '-0100']

    def test_empty(self):
        assert sort_timeline_dates([]) == []
