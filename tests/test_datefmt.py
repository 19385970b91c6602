from datetime import date

import pytest

from autorisation.utils.datefmt import humanize_date, is_valid_date, parse_date


def test_parse_basic() -> None:
    assert parse_date("25/09/2025") == date(2025, 9, 25)
    assert parse_date("5/2/2024") == date(2024, 2, 5)


@pytest.mark.parametrize(
    "value",
    ["31/02/2025", "29/02/2025", "0/1/2025", "1/0/2025", "١/٢/٢٠٢٥", " 5/2/2024", "5/2/2024\n"],
)
def test_parse_rejects(value: str) -> None:
    with pytest.raises(ValueError):
        parse_date(value)
    assert is_valid_date(value) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("25/09/2025", "25 septembre 2025"),
        ("01/08/2024", "1 août 2024"),
        ("5/2/2024", "5 février 2024"),
        ("31/12/2025", "31 décembre 2025"),
    ],
)
def test_humanize(value: str, expected: str) -> None:
    assert humanize_date(value) == expected


def test_humanize_degrades_to_raw_text() -> None:
    assert humanize_date("31/02/2025") == "31/02/2025"
    assert humanize_date("bientôt") == "bientôt"
