"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
from datetime import date

import pytest

from app.core.errors import (
    BatchTooLargeError,
    EmptyBatchError,
    EntryNotFoundError,
    InvalidPeriodQueryError,
    SalaryAppException,
)
from app.schemas.common import ErrorDetail, ErrorResponse


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_entry_not_found_error(self):
        err = EntryNotFoundError(day=date(2026, 3, 16))
        assert err.http_status == 404
        assert err.code == "ENTRY_NOT_FOUND"
        assert "2026-03-16" in err.message
        d = err.to_dict()
        assert d["code"] == "ENTRY_NOT_FOUND"
        assert d["details"]["day"] == "2026-03-16"

    def test_batch_too_large_error(self):
        err = BatchTooLargeError(max_items=62, received=70)
        assert err.http_status == 422
        assert err.code == "BATCH_TOO_LARGE"
        assert "62" in err.message
        assert "70" in err.message
        d = err.to_dict()
        assert d["details"]["max_items"] == 62
        assert d["details"]["received"] == 70

    def test_empty_batch_error(self):
        err = EmptyBatchError()
        assert err.http_status == 422
        assert err.code == "EMPTY_BATCH"

    def test_invalid_period_query_error(self):
        err = InvalidPeriodQueryError(start=date(2026, 4, 1), end=date(2026, 3, 1))
        assert err.http_status == 422
        assert err.code == "INVALID_PERIOD_QUERY"
        assert err.details == {"start": "2026-04-01", "end": "2026-03-01"}

    def test_base_class_defaults(self):
        err = SalaryAppException("boom")
        assert err.http_status == 500
        assert err.code == "INTERNAL_ERROR"
        assert str(err) == "boom"

    def test_to_dict_without_details(self):
        d = EmptyBatchError().to_dict()
        assert "code" in d
        assert "message" in d
        # details should not be in dict when empty
        assert "details" not in d


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_unknown_block_returns_validation_error(self, client):
        r = client.put("/entries/2026-03-16", json={"selected_blocks": ["H"]})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert "errors" in body["details"]
        assert isinstance(body["details"]["errors"], list)

    def test_negative_minutes_returns_validation_error(self, client):
        r = client.put("/entries/2026-03-16", json={"support_minutes": -5})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert "support_minutes" in fields

    @pytest.mark.parametrize("field", [
        "selected_blocks",
        "leader_blocks",
        "sub_leader_blocks",
        "support_minutes",
        "allowance_amount",
        "has_transport",
    ])
    def test_null_rejected(self, client, field):
        client.put("/entries/2026-03-02", json={"selected_blocks": ["A"]})
        r = client.put("/entries/2026-03-02", json={field: None})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert field in [e["field"] for e in body["details"]["errors"]]
        assert client.get("/entries/2026-03-02").json()["selected_blocks"] == ["A"]

    def test_null_clears_overrides(self, client):
        client.put("/entries/2026-03-02", json={
            "selected_blocks": ["A"], "campus": "tsukisamu", "transport_cost": 300,
        })
        r = client.put("/entries/2026-03-02", json={"campus": None, "transport_cost": None})
        assert r.status_code == 200
        body = r.json()
        assert body["transport_cost"] is None
        assert body["location"] == "hiraoka"

    def test_error_body_matches_envelope(self, client):
        r = client.put("/entries/2026-03-16", json={"selected_blocks": ["H"]})
        envelope = ErrorResponse.model_validate(r.json())
        errors = envelope.details["errors"]
        assert isinstance(errors[0], ErrorDetail)
        assert errors[0].field.startswith("selected_blocks")

    def test_unknown_field_rejected(self, client):
        r = client.put("/entries/2026-03-16", json={"location": "other"})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_bad_date_in_path(self, client):
        r = client.get("/entries/2026-13-40")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_closing_day_out_of_range(self, client):
        r = client.put("/settings", json={"closing_day": 29})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_negative_campus_rate(self, client):
        r = client.put("/settings", json={"campus_transport_rates": {"hiraoka": -1}})
        assert r.status_code == 422

    def test_oversized_batch_rejected(self, client):
        days = [f"2026-01-{d:02d}" for d in range(1, 32)] + [
            f"2026-02-{d:02d}" for d in range(1, 29)
        ] + [f"2026-03-{d:02d}" for d in range(1, 5)]
        assert len(days) == 63
        r = client.put("/entries/batch", json={"days": days, "changes": {"selected_blocks": ["A"]}})
        assert r.status_code == 422


class TestDomainErrors:
    def test_missing_entry_returns_404(self, client):
        r = client.get("/entries/2026-03-16")
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "ENTRY_NOT_FOUND"
        assert body["details"]["day"] == "2026-03-16"

    def test_delete_missing_entry(self, client):
        r = client.delete("/entries/2026-03-16")
        assert r.status_code == 404
        assert r.json()["code"] == "ENTRY_NOT_FOUND"

    def test_daily_pay_for_missing_entry(self, client):
        r = client.get("/payroll/daily/2026-03-16")
        assert r.status_code == 404

    def test_inverted_range(self, client):
        r = client.get("/entries", params={"start": "2026-04-01", "end": "2026-03-01"})
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_PERIOD_QUERY"
