"""Tests for date operators."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from json_reader.core.query.date_ops import (
    apply_date_operation,
    format_datetime,
    is_today,
    parse_datetime,
)


class TestParseDatetime:
    """Test date parsing."""

    def test_iso_datetime(self) -> None:
        assert parse_datetime("2024-03-05T07:08:09") == datetime(2024, 3, 5, 7, 8, 9)

    def test_iso_date(self) -> None:
        assert parse_datetime("2024-03-05") == datetime(2024, 3, 5)

    def test_utc_suffix_converted_to_local(self) -> None:
        parsed = parse_datetime("2024-03-05T12:00:00Z")
        expected = (
            datetime(2024, 3, 5, 12, tzinfo=timezone.utc)
            .astimezone()
            .replace(tzinfo=None)
        )

        assert parsed == expected

    def test_epoch_milliseconds(self) -> None:
        assert parse_datetime(0) == datetime.fromtimestamp(0)

    def test_unparseable(self) -> None:
        assert parse_datetime("not a date") is None
        assert parse_datetime(None) is None
        assert parse_datetime(True) is None
        assert parse_datetime({"y": 2024}) is None


class TestFormat:
    """Test format() operator."""

    def test_all_tokens(self) -> None:
        moment = datetime(2024, 3, 5, 7, 8, 9)

        assert format_datetime(moment, "YYYY-MM-DD HH:mm:ss") == "2024-03-05 07:08:09"

    def test_only_first_occurrence_replaced(self) -> None:
        moment = datetime(2024, 3, 5)

        assert format_datetime(moment, "DD/DD") == "05/DD"

    def test_apply_format(self) -> None:
        result = apply_date_operation(
            ["2024-12-25T10:30:00", "2023-01-02"], "format", "DD.MM.YYYY"
        )

        assert result == ["25.12.2024", "02.01.2023"]

    def test_unparseable_pass_through(self) -> None:
        result = apply_date_operation(
            ["garbage", 1593561600000], "format", "YYYY"
        )

        assert result == ["garbage", "2020"]


class TestIsToday:
    """Test isToday() operator."""

    def test_today_and_not_today(self) -> None:
        now = datetime.now()
        yesterday = now - timedelta(days=1)

        result = apply_date_operation(
            [now.isoformat(), yesterday.isoformat(), "nope"], "isToday"
        )

        assert result == [True, False, False]

    def test_time_of_day_ignored(self) -> None:
        today = date(2024, 6, 1)

        assert is_today("2024-06-01T23:59:59", today)
        assert not is_today("2024-06-02T00:00:00", today)


class TestUnknownDateOperation:
    """Unknown expressions leave the data alone."""

    def test_returns_copy(self) -> None:
        data = ["2024-01-01"]

        result = apply_date_operation(data, "weekday")

        assert result == data
        assert result is not data


class TestLenientParsing:
    """Dates outside ISO-8601 still parse."""

    def test_slash_separated_date(self) -> None:
        assert parse_datetime("2024/01/15") == datetime(2024, 1, 15)

    def test_rfc_2822(self) -> None:
        parsed = parse_datetime("Mon, 15 Jan 2024 10:30:00 +0000")
        expected = (
            datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
            .astimezone()
            .replace(tzinfo=None)
        )

        assert parsed == expected

    def test_format_accepts_non_iso_dates(self) -> None:
        result = apply_date_operation(["2024/01/15"], "format", "DD-MM-YYYY")

        assert result == ["15-01-2024"]

    def test_format_without_pattern_returns_data(self) -> None:
        assert apply_date_operation(["2024-01-15"], "format") == ["2024-01-15"]
