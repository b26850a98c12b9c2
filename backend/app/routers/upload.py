"""CV upload endpoint.

The backend handles:
  - file validation and text extraction (PDF/plain text)
  - deterministic keyword skill detection
  - importing detected catalog skills into the user's profile

Scanned CVs (no text layer) are rejected; OCR is not performed here.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, UploadFile, HTTPException

from shared.models import ExtractedSkill
from app.core.config import settings
from app.services.pdf_service import extract_text_from_pdf
from app.services.skill_extractor import extract_skills
from app.services.skill_import import import_extracted_skills
from app.services.skill_store import get_store

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_SIZE = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024


def _validate_file(file: UploadFile) -> None:
    if file.content_type not in ("application/pdf", "text/plain"):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type}. Use PDF or plain text.",
        )


async def _read_content(file: UploadFile) -> str:
    content = await file.read()
    if len(content) > MAX_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max {settings.MAX_UPLOAD_SIZE_MB} MB.",
        )
    if file.content_type == "application/pdf":
        try:
            return extract_text_from_pdf(content)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return content.decode("utf-8", errors="replace")


@router.post("/cv/{user_id}")
async def upload_cv(user_id: str, file: UploadFile = File(...)) -> dict:
    """Upload a CV PDF or text file and import the skills it mentions.

    Detected skills that exist in the catalog and are new to the user are
    added at the default confidence; everything else is skipped.
    """
    _validate_file(file)
    text = await _read_content(file)

    detected = sorted(extract_skills(text))
    result = import_extracted_skills(
        get_store(),
        user_id,
        [ExtractedSkill(name=name) for name in detected],
    )

    logger.info(
        "CV uploaded for user %s: %s (%d skills detected)", user_id, file.filename, len(detected),
        extra={"user_id": user_id, "skill_count": len(detected)},
    )
    return {
        "status": "ok",
        "filename": file.filename,
        "characters": len(text),
        "detected_skills": detected,
        "imported": result.imported,
        "skipped": result.skipped,
        "errors": result.errors,
    }
