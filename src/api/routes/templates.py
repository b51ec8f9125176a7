"""Saved event template endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, status

from api.dependencies import get_db
from api.models.responses import PreviewResponse
from core.database import insert_template, list_templates
from core.validation import validate_template
from models.templates import EventTemplate, StoredTemplate
from services.formatting import format_event_text

router = APIRouter(prefix="/templates")


@router.get("", response_model=list[StoredTemplate])
def list_templates_endpoint(conn: sqlite3.Connection = Depends(get_db)):
    """All saved templates, newest first."""
    return list_templates(conn)


@router.post("", response_model=StoredTemplate, status_code=status.HTTP_201_CREATED)
def save_template_endpoint(
    template: EventTemplate,
    conn: sqlite3.Connection = Depends(get_db),
):
    """Persist a snapshot of the current form."""
    return insert_template(conn, template)


@router.post("/preview", response_model=PreviewResponse)
def preview_template_endpoint(template: EventTemplate):
    """Render invitation text without saving."""
    return PreviewResponse(
        text=format_event_text(template),
        warnings=validate_template(template),
    )
