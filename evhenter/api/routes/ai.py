"""AI-assisted submission helpers: URL parsing and image generation."""

import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, status

from ...utils.llm import extract_event, generate_event_image
from ..auth import Identity, require_identity
from ..schemas import ImageRequest, ParseUrlRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai"])

def _is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)

@router.post("/parse-url")
def parse_url(
    body: ParseUrlRequest,
    identity: Identity = Depends(require_identity)
):
    """Extract event fields from a URL (or pasted text) for pre-filling the submission form."""
    if not body.url and not body.text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL is required")
    if body.url and not _is_valid_url(body.url):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid URL format")

    logger.info(f"Parsing event from {body.url or 'text'} for user {identity.id}")
    draft = extract_event(url=body.url, text=body.text)

    return {
        "success": True,
        "message": "Event parsed successfully",
        "data": draft.model_dump(),
        "meta": {
            "originalUrl": body.url,
            "parsedBy": "ai",
            "userId": identity.id
        }
    }

@router.post("/images/generate")
def generate_image(
    body: ImageRequest,
    identity: Identity = Depends(require_identity)
):
    """Generate a cover image for an event."""
    logger.info(f"Generating image for '{body.title}' for user {identity.id}")
    image_url = generate_event_image(
        title=body.title,
        event_type=body.eventType,
        city=body.city,
        description=body.description
    )

    return {
        "success": True,
        "message": "Image generated successfully",
        "data": {"imageUrl": image_url},
        "meta": {
            "title": body.title,
            "eventType": body.eventType,
            "userId": identity.id
        }
    }
