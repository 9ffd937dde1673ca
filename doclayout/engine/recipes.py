from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .. import config
from ..models import RGB, RenderRequest
from .dates import long_date


@dataclass(frozen=True)
class Page:
    width: float
    height: float
    margin: float

    @property
    def usable_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class Dim:
    """Page-relative coordinate: w*width + h*height + m*margin + c."""

    w: float = 0.0
    h: float = 0.0
    m: float = 0.0
    c: float = 0.0

    def resolve(self, page: Page) -> float:
        return self.w * page.width + self.h * page.height + self.m * page.margin + self.c


Coord = Union[Dim, float]


def at(value: Coord, page: Page) -> float:
    if isinstance(value, Dim):
        return value.resolve(page)
    return float(value)


def top(offset: float) -> Dim:
    return Dim(h=1.0, c=-offset)


def inset(offset: float = 0.0) -> Dim:
    return Dim(m=1.0, c=offset)


WIDTH = Dim(w=1.0)
RIGHT_EDGE = Dim(w=1.0, m=-1.0)
USABLE = Dim(w=1.0, m=-2.0)
MARGIN = inset()


@dataclass(frozen=True)
class Ref:
    """Field lookup: first key present (even if empty), else fallback. '@title' and '@date' are built in."""

    keys: Tuple[str, ...]
    fallback: str = ""

    def resolve(self, request: RenderRequest) -> str:
        for key in self.keys:
            if key == "@title":
                value = request.title
            elif key == "@date":
                value = long_date(request.created_at)
            else:
                value = (request.fields or {}).get(key)
            if value is not None:
                return str(value)
        return self.fallback


def ref(*keys: str, fallback: str = "") -> Ref:
    return Ref(keys=tuple(keys), fallback=fallback)


TITLE = ref("@title")
DATE = ref("@date")


@dataclass(frozen=True)
class Box:
    x: Coord
    y: Coord
    width: Coord
    height: Coord
    fill: Optional[RGB] = None
    border: Optional[RGB] = None
    border_width: float = 0.0


@dataclass(frozen=True)
class Rule:
    x1: Coord
    x2: Coord
    thickness: float
    color: RGB
    y: Optional[Coord] = None  # None: at cursor
    advance: float = 0.0


@dataclass(frozen=True)
class Cursor:
    y: Coord


@dataclass(frozen=True)
class Text:
    text: str
    font: str
    size: float
    color: RGB
    refs: Tuple[Ref, ...] = ()
    join: Optional[str] = None
    x: Coord = MARGIN
    y: Optional[Coord] = None  # None: at cursor
    y_signed: Optional[Coord] = None
    align: str = "left"
    upper: bool = False
    optional: bool = False
    advance: float = 0.0

    @property
    def is_meta(self) -> bool:
        return bool(self.refs)

    def resolve(self, request: RenderRequest) -> Optional[str]:
        """Final string, or None when an optional line has nothing to show."""
        if not self.refs:
            value = self.text
        else:
            values = [r.resolve(request) for r in self.refs]
            if self.optional and not any(values):
                return None
            if self.join is not None:
                value = self.join.join(v for v in values if v)
            else:
                value = self.text.format(*values)
        return value.upper() if self.upper else value


Step = Union[Box, Rule, Cursor, Text]


@dataclass(frozen=True)
class BodyRegion:
    margin_x: Coord = MARGIN
    width: Coord = USABLE
    size: float = 11.0
    line_height: float = 17.0
    font: str = "regular"
    centered: bool = False


@dataclass(frozen=True)
class TemplateRecipe:
    key: str
    name: str
    steps: Tuple[Step, ...]
    body: BodyRegion
    after: Tuple[Step, ...] = ()
    signature_anchor: str = "right"
    start: Coord = Dim(h=1.0, m=-1.0, c=-20.0)

    @property
    def furniture(self) -> Tuple[Step, ...]:
        return tuple(s for s in self.steps if not (isinstance(s, Text) and s.is_meta))

    @property
    def meta_fields(self) -> Tuple[Text, ...]:
        return tuple(s for s in self.steps if isinstance(s, Text) and s.is_meta)


WHITE: RGB = (1.0, 1.0, 1.0)
INK: RGB = (0.15, 0.18, 0.25)
MUTED: RGB = (0.5, 0.5, 0.55)
HAIRLINE: RGB = (0.85, 0.85, 0.88)
BODY: RGB = config.BODY_COLOR


def _band(height: float, fill: RGB) -> Box:
    return Box(x=0.0, y=top(height), width=WIDTH, height=height, fill=fill)


DEFAULT_TEMPLATE = "custom_freeform"

TEMPLATES: Dict[str, TemplateRecipe] = {
    # ----------------
    # Certificates & HR letters (centered signature)
    # ----------------
    "certificate_completion": TemplateRecipe(
        key="certificate_completion",
        name="Certificate of Completion",
        steps=(
            Box(x=Dim(m=0.5), y=Dim(m=0.5), width=Dim(w=1.0, m=-1.0), height=Dim(h=1.0, m=-1.0),
                border=(0.75, 0.65, 0.45), border_width=3.0),
            Box(x=Dim(m=0.5, c=8.0), y=Dim(m=0.5, c=8.0), width=Dim(w=1.0, m=-1.0, c=-16.0),
                height=Dim(h=1.0, m=-1.0, c=-16.0), border=(0.85, 0.78, 0.6), border_width=1.0),
            Cursor(top(80)),
            Text("CERTIFICATE OF COMPLETION", "bold", 22, (0.25, 0.2, 0.15), align="center", advance=15),
            Rule(x1=Dim(w=0.5, c=-100.0), x2=Dim(w=0.5, c=100.0), thickness=1.5, color=(0.75, 0.65, 0.45), advance=40),
            Text("This is to certify that", "italic", 12, (0.35, 0.35, 0.4), align="center", advance=35),
            Text("{0}", "bold", 28, (0.15, 0.15, 0.2), refs=(ref("recipient_name"),), align="center",
                 optional=True, advance=50),
        ),
        body=BodyRegion(margin_x=inset(20), width=Dim(w=1.0, m=-2.0, c=-40.0), size=11, line_height=20, centered=True),
        after=(
            Text("Issued by: {0}", "italic", 11, (0.4, 0.4, 0.5), refs=(ref("issuer_name", "company_name"),),
                 align="center", optional=True,
                 y=inset(60), y_signed=inset(config.SIGNATURE_RESERVED_HEIGHT + 30)),
        ),
        signature_anchor="center",
    ),
    "offer_letter": TemplateRecipe(
        key="offer_letter",
        name="Offer Letter",
        steps=(
            _band(80, (0.15, 0.2, 0.35)),
            Text("{0}", "bold", 20, WHITE, refs=(ref("company_name", fallback="Company"),), align="center", y=top(50)),
            Cursor(top(110)),
            Text("OFFER LETTER", "bold", 16, (0.15, 0.2, 0.35), advance=30),
            Text("Date: {0}", "regular", 10, MUTED, refs=(DATE,), advance=25),
            Text("Dear {0},", "regular", 11, BODY, refs=(ref("candidate_name"),), optional=True, advance=25),
        ),
        body=BodyRegion(size=11, line_height=18),
        signature_anchor="center",
    ),
    "experience_letter": TemplateRecipe(
        key="experience_letter",
        name="Experience Letter",
        steps=(
            Text("{0}", "bold", 18, (0.2, 0.25, 0.35), refs=(ref("company_name", fallback="Organization"),),
                 align="center", y=top(50)),
            Rule(x1=MARGIN, x2=RIGHT_EDGE, y=top(65), thickness=1.0, color=(0.3, 0.35, 0.45)),
            Cursor(top(100)),
            Text("EXPERIENCE LETTER", "bold", 14, (0.2, 0.25, 0.35), advance=30),
            Text("Date: {0}", "regular", 10, MUTED, refs=(DATE,), advance=25),
            Text("To Whom It May Concern,", "italic", 11, (0.3, 0.3, 0.35), advance=25),
        ),
        body=BodyRegion(size=11, line_height=18),
        signature_anchor="center",
    ),

    # ----------------
    # Business correspondence & reports
    # ----------------
    "business_email_letter": TemplateRecipe(
        key="business_email_letter",
        name="Business Emails & Letters",
        steps=(
            Text("{0}", "regular", 10, MUTED, refs=(DATE,), x=RIGHT_EDGE, align="right", advance=30),
            Text("{0}", "bold", 16, INK, refs=(TITLE,), advance=25),
            Text("To: {0}", "regular", 11, (0.3, 0.32, 0.4), refs=(ref("audience"),), optional=True, advance=20),
            Text("Re: {0}", "italic", 11, (0.4, 0.4, 0.45), refs=(ref("topic"),), optional=True, advance=25),
        ),
        body=BodyRegion(size=11, line_height=17),
    ),
    "business_report": TemplateRecipe(
        key="business_report",
        name="Reports (Status & Project)",
        steps=(
            _band(70, (0.96, 0.95, 0.92)),
            Text("{0}", "bold", 18, INK, refs=(TITLE,), y=top(40)),
            Text("", "regular", 10, (0.4, 0.42, 0.5), refs=(ref("period"), ref("topic")), join=" • ",
                 optional=True, y=top(58)),
            Cursor(top(100)),
        ),
        body=BodyRegion(size=11, line_height=17),
    ),
    "proposal_quotation": TemplateRecipe(
        key="proposal_quotation",
        name="Proposals & Quotations",
        steps=(
            _band(90, (0.12, 0.15, 0.25)),
            Text("PROPOSAL", "bold", 24, WHITE, y=top(45)),
            Text("{0}", "regular", 12, (0.8, 0.82, 0.88), refs=(ref("project_or_service", "@title"),), y=top(70)),
            Cursor(top(120)),
            Text("Prepared for: {0}", "italic", 11, (0.4, 0.4, 0.45), refs=(ref("client_or_stakeholder"),),
                 optional=True, advance=20),
            Text("Date: {0}", "regular", 10, MUTED, refs=(DATE,), advance=30),
        ),
        body=BodyRegion(size=11, line_height=17),
    ),
    "policy_sop_manual": TemplateRecipe(
        key="policy_sop_manual",
        name="Policies, SOPs & Manuals",
        steps=(
            Box(x=MARGIN, y=top(80), width=USABLE, height=60.0,
                fill=(0.95, 0.95, 0.96), border=(0.8, 0.8, 0.82), border_width=1.0),
            Text("{0}", "bold", 10, (0.4, 0.4, 0.45), refs=(ref("doc_type", fallback="PROCEDURE"),),
                 x=inset(15), y=top(45), upper=True),
            Text("{0}", "bold", 14, INK, refs=(TITLE,), x=inset(15), y=top(62)),
            Cursor(top(110)),
            Text("Department: {0}", "regular", 10, MUTED, refs=(ref("department"),), optional=True, advance=15),
            Text("Effective Date: {0}", "regular", 10, MUTED, refs=(DATE,), advance=25),
            Rule(x1=MARGIN, x2=RIGHT_EDGE, thickness=0.5, color=HAIRLINE, advance=20),
        ),
        body=BodyRegion(size=10, line_height=16),
    ),
    "contract_skeleton": TemplateRecipe(
        key="contract_skeleton",
        name="Contracts & Agreements (Skeletons)",
        steps=(
            Text("{0}", "bold", 16, (0.15, 0.15, 0.2), refs=(TITLE,), upper=True, advance=25),
            Rule(x1=MARGIN, x2=RIGHT_EDGE, thickness=1.5, color=(0.2, 0.2, 0.25), advance=25),
            Text('Between: {0} ("Party A") and {1} ("Party B")', "italic", 10, (0.35, 0.35, 0.4),
                 refs=(ref("party_a"), ref("party_b")), optional=True, advance=20),
            Text("Effective Date: {0}", "regular", 10, MUTED, refs=(ref("effective_date"),), optional=True, advance=25),
        ),
        body=BodyRegion(size=10, line_height=16),
    ),
    "financial_summary": TemplateRecipe(
        key="financial_summary",
        name="Financial Summaries",
        steps=(
            _band(75, (0.1, 0.3, 0.2)),
            Text("FINANCIAL SUMMARY", "bold", 18, WHITE, y=top(40)),
            Text("", "regular", 11, (0.85, 0.9, 0.87), refs=(ref("period"), ref("company_or_unit")), join=" | ",
                 optional=True, y=top(58)),
            Cursor(top(100)),
        ),
        body=BodyRegion(size=11, line_height=17),
    ),
    "marketing_brief": TemplateRecipe(
        key="marketing_brief",
        name="Marketing Content Briefs",
        steps=(
            _band(85, (0.9, 0.35, 0.4)),
            Text("CAMPAIGN BRIEF", "bold", 20, WHITE, y=top(42)),
            Text("{0}", "regular", 12, (1.0, 0.9, 0.9), refs=(ref("channel_or_campaign", "@title"),), y=top(65)),
            Cursor(top(110)),
            Text("Target: {0}", "italic", 10, (0.4, 0.4, 0.45), refs=(ref("target_segment"),),
                 optional=True, advance=20),
        ),
        body=BodyRegion(size=11, line_height=17),
    ),

    # ----------------
    # Fallback
    # ----------------
    "custom_freeform": TemplateRecipe(
        key="custom_freeform",
        name="AI Writer",
        steps=(
            Text("{0}", "bold", 18, INK, refs=(TITLE,), advance=10),
            Rule(x1=MARGIN, x2=RIGHT_EDGE, thickness=0.5, color=HAIRLINE, advance=25),
            Text("{0}", "regular", 10, MUTED, refs=(DATE,), advance=25),
        ),
        body=BodyRegion(width=Dim(w=0.95, m=-1.9), size=11, line_height=17),
    ),
}


def recipe(template_id: object) -> TemplateRecipe:
    """Never raises: anything that is not a known key gets the freeform layout."""
    if isinstance(template_id, str):
        found = TEMPLATES.get(template_id)
        if found is not None:
            return found
    return TEMPLATES[DEFAULT_TEMPLATE]


def signature_anchor_for(template_id: object) -> str:
    return recipe(template_id).signature_anchor
