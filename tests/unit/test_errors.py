"""Unit tests for the ledger error taxonomy."""

from fundledger.services.errors import (
    DataDegradedError,
    InsufficientRemainderError,
    InvalidInputError,
    NotFoundError,
)


def test_status_codes():
    assert InvalidInputError().http_status == 400
    assert NotFoundError().http_status == 404
    assert InsufficientRemainderError(attempted=2, available=1).http_status == 409


def test_insufficient_remainder_body():
    error = InsufficientRemainderError(attempted=12_000, available=10_000)

    assert error.to_dict() == {
        "code": "insufficient_remainder",
        "message": "Requested 12000 exceeds available remainder 10000 (minor units)",
        "attempted": 12_000,
        "available": 10_000,
    }


def test_degraded_error_carries_failure_status():
    error = DataDegradedError("sponsorships")

    assert error.source == "sponsorships"
    assert error.http_status == 500
    assert error.to_dict() == {
        "code": "data_degraded",
        "message": "Balance source unavailable: sponsorships",
    }
