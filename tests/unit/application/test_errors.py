from __future__ import annotations

from rabbitry.application.errors import (
    ConflictError,
    InfrastructureError,
    NotFound,
    TransientDispatchFailure,
    ValidationError,
)


def test_payload_omits_absent_details():
    assert NotFound("Doe not found").to_payload() == {
        "code": "not_found",
        "message": "Doe not found",
    }


def test_payload_copies_details():
    details = {"hutch_id": "H-4"}
    payload = ValidationError("Hutch occupied", details=details).to_payload()

    assert payload["details"] == {"hutch_id": "H-4"}
    assert payload["details"] is not details
    assert "retryable" not in payload


def test_retryable_errors_are_flagged():
    assert ConflictError("Reminder already completed").to_payload()["retryable"] is True
    assert TransientDispatchFailure("Daily limit reached").status_code == 503
    assert TransientDispatchFailure("Daily limit reached").to_payload()["retryable"] is True
    assert "retryable" not in InfrastructureError("boom").to_payload()
