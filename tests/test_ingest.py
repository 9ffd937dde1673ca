from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from doclayout.engine.ingest import (
    DEFAULT_TITLE,
    load_request,
    parse_timestamp,
    request_from_dict,
    signature_from_dict,
)
from doclayout.models import SignatureKind

RECORD = {
    "id": "9f8e7d6c5b4a",
    "title": "Offer for Sam",
    "created_at": "2024-01-05T09:30:00Z",
    "metadata": {
        "content": "Dear Sam,\n\nWelcome aboard.",
        "templateId": "offer_letter",
        "fields": {"company_name": "Acme Corp", "candidate_name": "Sam", "empty": None},
        "signature": {
            "signedByName": "Jane Doe",
            "signedByRole": "HR Lead",
            "signatureType": "drawn",
            "signedAt": "2024-01-06T12:00:00Z",
            "signatureImageUrl": "https://example.com/sig.png",
        },
    },
}


def test_nested_record_is_read() -> None:
    request = request_from_dict(RECORD)
    assert request.doc_id == "9f8e7d6c5b4a"
    assert request.title == "Offer for Sam"
    assert request.body.startswith("Dear Sam")
    assert request.template_id == "offer_letter"
    assert request.fields == {"company_name": "Acme Corp", "candidate_name": "Sam"}
    assert request.created_at == datetime(2024, 1, 5, 9, 30, tzinfo=timezone.utc)

    sig = request.signature
    assert sig is not None
    assert sig.kind is SignatureKind.DRAWN
    assert sig.signer_role == "HR Lead"
    assert sig.image_url == "https://example.com/sig.png"
    assert sig.image_bytes is None


def test_flat_record_and_defaults() -> None:
    request = request_from_dict({"doc_id": "x1", "body": "text", "template_id": "custom_freeform"})
    assert request.title == DEFAULT_TITLE
    assert request.body == "text"
    assert request.template_id == "custom_freeform"
    assert request.fields == {}
    assert request.signature is None
    assert request.created_at.tzinfo is not None


def test_metadata_wins_over_flat_keys() -> None:
    request = request_from_dict({"doc_id": "x", "body": "flat", "metadata": {"content": "nested"}})
    assert request.body == "nested"


@pytest.mark.parametrize("data", [{}, {"doc_id": "  "}, {"title": "no id"}])
def test_missing_doc_id_is_rejected(data) -> None:
    with pytest.raises(ValueError):
        request_from_dict(data)


def test_non_object_payloads_are_rejected() -> None:
    with pytest.raises(ValueError):
        request_from_dict(["not", "an", "object"])
    with pytest.raises(ValueError):
        request_from_dict({"doc_id": "x", "metadata": {"fields": ["a"]}})


def test_signature_defaults_to_typed() -> None:
    sig = signature_from_dict({"signer_name": "Jane Doe"})
    assert sig.kind is SignatureKind.TYPED
    assert sig.signer_role is None


def test_signature_errors() -> None:
    assert signature_from_dict(None) is None
    with pytest.raises(ValueError):
        signature_from_dict({"signatureType": "typed"})
    with pytest.raises(ValueError):
        signature_from_dict({"signedByName": "Jane", "signatureType": "stamped"})


def test_parse_timestamp() -> None:
    assert parse_timestamp("2024-03-09") == datetime(2024, 3, 9)
    aware = parse_timestamp("2024-03-09T10:00:00Z")
    assert aware.utcoffset().total_seconds() == 0
    with pytest.raises(ValueError):
        parse_timestamp("yesterday")


def test_load_request(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(RECORD), encoding="utf-8")
    assert load_request(path).doc_id == "9f8e7d6c5b4a"


def test_load_request_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_request(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_request(bad)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-01-05T09:30:00.12+00:00", datetime(2024, 1, 5, 9, 30, 0, 120000, tzinfo=timezone.utc)),
        ("2024-01-05T09:30:00.1234567Z", datetime(2024, 1, 5, 9, 30, 0, 123456, tzinfo=timezone.utc)),
        ("2024-01-05 09:30:00.5+00", datetime(2024, 1, 5, 9, 30, 0, 500000, tzinfo=timezone.utc)),
    ],
)
def test_database_timestamps_with_odd_fractions(raw: str, expected: datetime) -> None:
    assert parse_timestamp(raw) == expected
