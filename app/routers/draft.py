"""
Draft Router - placeholder for applying suggestions as WordPress drafts.

POST /api/draft accepts any body and always answers 501.
"""

import logging

from fastapi import APIRouter

from app.core.errors import NotImplementedFeature


logger = logging.getLogger("seo.routers.draft")


router = APIRouter(prefix="/api", tags=["draft"])

DRAFT_NOT_IMPLEMENTED_MESSAGE = "Funzionalità non ancora implementata."
DRAFT_NOT_IMPLEMENTED_DETAILS = (
    "La possibilità di applicare le modifiche come bozza direttamente da qui "
    "sarà disponibile in una versione futura."
)


@router.post("/draft")
async def create_draft():
    """The body is never read."""
    raise NotImplementedFeature(DRAFT_NOT_IMPLEMENTED_MESSAGE, details=DRAFT_NOT_IMPLEMENTED_DETAILS)
