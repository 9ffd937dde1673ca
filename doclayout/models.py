from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union


RGB = Tuple[float, float, float]


class SignatureKind(str, Enum):
    DRAWN = "drawn"
    UPLOADED = "uploaded"
    TYPED = "typed"


class RenderFailure(Exception):
    """Collaborator-level failure (font embedding etc.) surfaced to the caller."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class SignatureDescriptor:
    signer_name: str
    signed_at: datetime
    kind: SignatureKind = SignatureKind.TYPED
    signer_role: Optional[str] = None
    image_bytes: Optional[bytes] = None
    image_url: Optional[str] = None

    @property
    def has_image(self) -> bool:
        # typed signatures never carry an image mark
        if self.kind == SignatureKind.TYPED:
            return False
        return bool(self.image_bytes) or bool(self.image_url)


@dataclass(frozen=True)
class RenderRequest:
    doc_id: str
    title: str
    body: str
    created_at: datetime
    template_id: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)
    signature: Optional[SignatureDescriptor] = None


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: RGB


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    border: Optional[RGB] = None
    border_width: float = 0.0


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    thickness: float
    color: RGB


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    data: bytes = field(repr=False)


DrawOp = Union[TextOp, RectOp, LineOp, ImageOp]


class RenderResult(NamedTuple):
    ops: List[DrawOp]
    file_name: str
