import pytest

from app.services.transcript_service import parse_leading_int, parse_transcript_request
from app.utils.errors import InvalidParameter, MissingParameter


def test_ticker_is_normalized():
    request = parse_transcript_request(" msft ", "2024", "2")
    assert request.ticker == "MSFT"
    assert (request.year, request.quarter) == (2024, 2)
    assert request.label == "MSFT 2024 Q2"


@pytest.mark.parametrize("year", ["2000", "2030"])
def test_year_bounds_accepted(year):
    assert parse_transcript_request("AAPL", year, "1").year == int(year)


@pytest.mark.parametrize("quarter", ["1", "4"])
def test_quarter_bounds_accepted(quarter):
    assert parse_transcript_request("AAPL", "2024", quarter).quarter == int(quarter)


@pytest.mark.parametrize("year", ["1999", "2031", "abc", "-2024", "２０２４"])
def test_year_out_of_range(year):
    with pytest.raises(InvalidParameter, match="Year must be between 2000 and 2030"):
        parse_transcript_request("AAPL", year, "1")


def test_presence_checked_before_format():
    # A malformed ticker does not mask a missing year
    with pytest.raises(MissingParameter, match="Year is required"):
        parse_transcript_request("12AB", None, "1")


def test_empty_string_counts_as_missing():
    with pytest.raises(MissingParameter, match="Quarter is required"):
        parse_transcript_request("AAPL", "2024", "")


def test_whitespace_ticker_is_invalid():
    with pytest.raises(InvalidParameter, match="Ticker must be 1-5 letters"):
        parse_transcript_request("   ", "2024", "1")


@pytest.mark.parametrize(
    "raw, expected",
    [("2024", 2024), (" 2024", 2024), ("2024abc", 2024), ("3.0", 3), ("+4", 4), ("q4", None), ("", None), ("２０２４", None)],
)
def test_parse_leading_int(raw, expected):
    assert parse_leading_int(raw) == expected
