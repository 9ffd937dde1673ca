from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..models import RenderRequest, SignatureDescriptor, SignatureKind


DEFAULT_TITLE = "Untitled Document"

# datetime.fromisoformat before 3.11 only takes 3 or 6 fraction digits and +HH:MM offsets
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")
_SHORT_OFFSET = re.compile(r"(:\d{2}(?:\.\d+)?)([+-]\d{2})$")


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value is None or not str(value).strip():
        return datetime.now(timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text)
    text = _SHORT_OFFSET.sub(r"\1\2:00", text)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp: {value!r}") from exc


def _clean_fields(raw: Any) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("fields must be an object")
    return {str(k): str(v) for k, v in raw.items() if v is not None}


def signature_from_dict(data: Optional[dict]) -> Optional[SignatureDescriptor]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValueError("signature must be an object")
    name = str(data.get("signedByName") or data.get("signer_name") or "").strip()
    if not name:
        raise ValueError("signature requires signedByName")
    raw_kind = str(data.get("signatureType") or data.get("kind") or "typed").strip().lower()
    try:
        kind = SignatureKind(raw_kind)
    except ValueError as exc:
        raise ValueError(f"Unsupported signature type: {raw_kind}") from exc
    role = data.get("signedByRole") or data.get("signer_role")
    return SignatureDescriptor(
        signer_name=name,
        signer_role=str(role) if role else None,
        signed_at=parse_timestamp(data.get("signedAt") or data.get("signed_at")),
        kind=kind,
        image_url=data.get("signatureImageUrl") or data.get("image_url") or None,
    )


def request_from_dict(data: dict) -> RenderRequest:
    """
    Build a RenderRequest from a stored document record. Reads the nested
    ``metadata`` block (content/templateId/fields/signature) and falls back to
    flat top-level keys.
    """
    if not isinstance(data, dict):
        raise ValueError("Request must be a JSON object")
    meta = data.get("metadata") or {}
    if not isinstance(meta, dict):
        raise ValueError("metadata must be an object")

    def pick(*keys: str) -> Any:
        for key in keys:
            if meta.get(key) is not None:
                return meta[key]
            if data.get(key) is not None:
                return data[key]
        return None

    doc_id = str(data.get("doc_id") or data.get("id") or "").strip()
    if not doc_id:
        raise ValueError("Request requires doc_id")

    return RenderRequest(
        doc_id=doc_id,
        title=str(data.get("title") or DEFAULT_TITLE),
        body=str(pick("content", "body") or ""),
        created_at=parse_timestamp(data.get("created_at")),
        template_id=pick("templateId", "template_id"),
        fields=_clean_fields(pick("fields")),
        signature=signature_from_dict(pick("signature")),
    )


def load_request(path: Path) -> RenderRequest:
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Request file is not valid JSON: {path}") from exc
    return request_from_dict(data)
