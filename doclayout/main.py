from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from . import config
from .engine.ingest import load_request
from .engine.preview import render_preview
from .engine.recipes import TEMPLATES
from .engine.writer import render_pdf
from .models import RenderFailure, RenderRequest, SignatureDescriptor, SignatureKind

app = typer.Typer(help="Single-page document layout engine")
logger = logging.getLogger(__name__)

SAMPLE_BODY = (
    "## Summary\n\n"
    "This document was generated from the **{name}** layout. It exercises "
    "wrapping, paragraph spacing and the signature block.\n\n"
    "- First point worth noting\n"
    "- Second point, slightly longer so that it has to wrap onto a following line\n\n"
    "1. Numbered items are kept as written."
)

SAMPLE_FIELDS = {
    "recipient_name": "Jane Doe",
    "issuer_name": "Tech Academy",
    "company_name": "Acme Corp",
    "candidate_name": "Jane Doe",
    "audience": "All staff",
    "topic": "Quarterly planning",
    "period": "Q3 2024",
    "project_or_service": "Website redesign",
    "client_or_stakeholder": "Globex",
    "doc_type": "Policy",
    "department": "Operations",
    "party_a": "Acme Corp",
    "party_b": "Globex",
    "effective_date": "July 1, 2024",
    "company_or_unit": "Acme Corp",
    "channel_or_campaign": "Autumn launch",
    "target_segment": "Small businesses",
}


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable info logging")) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def render(
    request_json: Path = typer.Argument(..., help="JSON document record to render"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    preview: bool = typer.Option(True, "--preview/--no-preview", help="Also write a PNG of the page"),
) -> None:
    if out:
        config.set_out_dir(out)
    try:
        request = load_request(request_json)
        pdf_path = render_pdf(request)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Invalid request: {exc}", err=True)
        raise typer.Exit(code=1)
    except RenderFailure as exc:
        logger.exception("Render failed for %s", request_json)
        typer.echo(f"Render failed ({exc.kind}): {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"PDF: {pdf_path}")
    if preview:
        png_path = render_preview(pdf_path.stem, pdf_path)
        typer.echo(f"PREVIEW: {png_path}")


@app.command()
def templates() -> None:
    for key, tpl in TEMPLATES.items():
        typer.echo(f"{key}\t{tpl.name}")


@app.command()
def gallery(
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    signed: bool = typer.Option(True, "--signed/--unsigned", help="Attach a typed signature"),
) -> None:
    if out:
        config.set_out_dir(out)
    now = datetime.now(timezone.utc)
    for index, (key, tpl) in enumerate(TEMPLATES.items()):
        signature = None
        if signed:
            signature = SignatureDescriptor(
                signer_name="Jane Doe",
                signer_role="Director",
                signed_at=now,
                kind=SignatureKind.TYPED,
            )
        request = RenderRequest(
            doc_id=f"{index:02d}gallery",
            title=tpl.name,
            body=SAMPLE_BODY.format(name=tpl.name),
            created_at=now,
            template_id=key,
            fields=dict(SAMPLE_FIELDS),
            signature=signature,
        )
        path = render_pdf(request, fetch=None)
        typer.echo(f"{key}: {path}")


if __name__ == "__main__":
    app()
