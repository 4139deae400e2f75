"""NACHA generation, export, and validation endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel

from achexport.models.ach import Batch
from achexport.nacha.validators import validate_account_number, validate_routing_number
from achexport.services.nacha_service import NachaExportService

router = APIRouter(tags=["nacha"])

_MEDIA_TYPES = {"csv": "text/csv", "json": "application/json"}


class GenerateRequest(BaseModel):
    company_id: str
    batch: Batch


class ValidateRequest(BaseModel):
    routing_number: Optional[str] = None
    account_number: Optional[str] = None


def get_service(request: Request) -> NachaExportService:
    return request.app.state.service


@router.post("/files")
def generate_file(body: GenerateRequest, service: NachaExportService = Depends(get_service)) -> dict:
    """Generate, store, and return the NACHA file for a batch."""
    result = service.generate(body.batch, body.company_id)
    summary = result.summary
    return {
        "success": True,
        "file_name": result.file_name,
        "file_content": result.content,
        "path": result.path,
        "summary": {
            "total_entries": summary.entry_count,
            "total_credits": float(summary.total_credits),
            "total_debits": float(summary.total_debits),
            "entry_hash": summary.entry_hash,
            "block_count": summary.block_count,
            "effective_date": summary.effective_date,
        },
    }


@router.post("/exports/{fmt}")
def export_batch(
    fmt: Literal["csv", "json"], batch: Batch, service: NachaExportService = Depends(get_service)
) -> Response:
    """Return the CSV or JSON variant of a batch."""
    export = service.export(batch, fmt)
    return Response(
        content=export.content,
        media_type=_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/validate")
async def validate_fields(body: ValidateRequest) -> dict[str, Optional[bool]]:
    """Check a routing and/or account number without building anything."""
    return {
        "routing_number_valid": (
            validate_routing_number(body.routing_number) if body.routing_number is not None else None
        ),
        "account_number_valid": (
            validate_account_number(body.account_number) if body.account_number is not None else None
        ),
    }
