"""
Tests for the utils module.
"""

from datetime import UTC, date, datetime
from hashlib import sha256

from statcard.utils import calculate_age, from_iso_z, hash_repo, parse_int


class TestCalculateAge:
    """Test the uptime string."""

    def test_plural(self):
        now = datetime(2024, 12, 27, tzinfo=UTC)
        assert calculate_age(date(2021, 10, 25), now) == "3 years, 2 months, 2 days"

    def test_singular(self):
        now = datetime(2022, 11, 26, tzinfo=UTC)
        assert calculate_age(date(2021, 10, 25), now) == "1 year, 1 month, 1 day"

    def test_naive_datetime_is_utc(self):
        now = datetime(2020, 1, 1, tzinfo=UTC)
        assert calculate_age(datetime(2020, 1, 1), now) == "0 years, 0 months, 0 days"


class TestHashRepo:
    """Test one-way repository hashing."""

    def test_plain_sha256(self):
        assert hash_repo("u/r") == sha256(b"u/r").hexdigest()

    def test_deterministic_and_distinct(self):
        assert hash_repo("u/r") == hash_repo("u/r")
        assert hash_repo("u/r") != hash_repo("u/r2")

    def test_keyed(self):
        assert hash_repo("u/r", b"a") != hash_repo("u/r", b"b")
        assert hash_repo("u/r", b"a") != hash_repo("u/r")


class TestParsers:
    """Test small parsing helpers."""

    def test_parse_int(self):
        assert parse_int("42") == 42
        assert parse_int("NaN") is None
        assert parse_int("") is None

    def test_from_iso_z(self):
        assert from_iso_z("2020-06-01T08:30:00Z") == datetime(2020, 6, 1, 8, 30, tzinfo=UTC)
