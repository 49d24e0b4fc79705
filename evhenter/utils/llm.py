"""Utility functions for interacting with LLMs (OpenAI).

This module provides the AI collaborators used by the submission flow:
extracting a structured event draft from a web page or free text, and
generating a cover image for an event.
"""

import json
import logging
import re
from enum import Enum
from typing import Dict, Any, Optional, List

import openai
import requests
from bs4 import BeautifulSoup
from pydantic import BaseModel, ValidationError as PydanticValidationError

from evhenter.config.external_services.openai import OpenAIConfig, init_openai_client

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 8000

EVENT_TYPE_SLUGS = [
    'konsert', 'workshop', 'festival', 'teater', 'sport', 'mat-drikke',
    'kunst', 'nettverking', 'marked', 'konferanse',
]

FETCH_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (compatible; evHenterBot/1.0; +https://evhenter.ai)',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'nb-NO,nb;q=0.9,en;q=0.5',
}

class ExtractionFailureReason(str, Enum):
    UPSTREAM_UNAVAILABLE = 'UpstreamUnavailable'
    CONTENT_POLICY = 'ContentPolicy'
    OTHER = 'Other'

class ExtractionFailure(Exception):
    """The AI collaborator could not produce a result."""

    def __init__(self, reason: ExtractionFailureReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

class StructuredEventDraft(BaseModel):
    """Event fields extracted by the model. Field names match the submission body."""
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    city: Optional[str] = None
    start_date: str
    end_date: Optional[str] = None
    is_free: bool = False
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    organizer_name: Optional[str] = None
    organizer_url: Optional[str] = None
    ticket_url: Optional[str] = None
    capacity: Optional[int] = None
    original_url: Optional[str] = None

def _extract_json_from_response(response_text: str) -> Optional[Dict[str, Any]]:
    """Extract JSON from a response that might be wrapped in markdown code blocks."""
    # First try parsing as-is
    try:
        return json.loads(response_text)
    except json.JSONDecodeError:
        pass

    # Try extracting from markdown code block
    if "```" in response_text:
        try:
            # Find content between code blocks
            start = response_text.find("```") + 3
            end = response_text.rfind("```")
            # Skip language identifier if present
            if "json" in response_text[start:start+10]:
                start = response_text.find("\n", start) + 1
            json_str = response_text[start:end].strip()
            return json.loads(json_str)
        except (json.JSONDecodeError, ValueError):
            pass

    return None

def _failure_from_openai_error(error: Exception) -> ExtractionFailure:
    """Map an OpenAI client error onto an extraction failure reason."""
    if isinstance(error, openai.BadRequestError) and 'content_policy' in str(error):
        return ExtractionFailure(ExtractionFailureReason.CONTENT_POLICY, str(error))
    if isinstance(error, (
        openai.APIConnectionError,
        openai.RateLimitError,
        openai.InternalServerError,
        openai.AuthenticationError,
    )):
        return ExtractionFailure(ExtractionFailureReason.UPSTREAM_UNAVAILABLE, str(error))
    return ExtractionFailure(ExtractionFailureReason.OTHER, str(error))

def _client():
    try:
        return init_openai_client()
    except ValueError as e:
        # Missing API key: the service is not configured
        raise ExtractionFailure(ExtractionFailureReason.UPSTREAM_UNAVAILABLE, str(e)) from e

def fetch_page_text(url: str, timeout: float = 15.0) -> str:
    """Fetch ``url`` and return its visible text, truncated for the model."""
    try:
        response = requests.get(url, headers=FETCH_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error fetching page {url}: {e}")
        raise ExtractionFailure(ExtractionFailureReason.OTHER, f"Could not fetch {url}: {e}") from e

    soup = BeautifulSoup(response.text, 'html.parser')
    for tag in soup(['script', 'style', 'noscript']):
        tag.decompose()
    text = re.sub(r'\s+', ' ', soup.get_text(separator=' ')).strip()
    return text[:MAX_CONTENT_CHARS]

def extract_event(
    url: Optional[str] = None,
    text: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None
) -> StructuredEventDraft:
    """
    Use OpenAI to extract a structured event from a web page or free text.

    Args:
        url: Page describing the event. Fetched unless ``text`` is given
        text: Event text, used instead of fetching ``url``
        config: Optional LLM configuration. If not provided, uses default config

    Returns:
        StructuredEventDraft: The extracted fields

    Raises:
        ExtractionFailure: If the page cannot be fetched, the model is
            unavailable or refuses, or the reply is not a usable event
    """
    if not url and not text:
        raise ValueError("Either url or text is required")

    content = text[:MAX_CONTENT_CHARS] if text else fetch_page_text(url)
    config = config or OpenAIConfig().to_dict()
    client = _client()

    logger.info(f"Extracting event with {config['model']} ({len(content)} chars, url={url})")

    try:
        response = client.chat.completions.create(
            model=config['model'],
            temperature=config['temperature'],
            max_tokens=config['max_tokens'],
            messages=[
                {
                    "role": "system",
                    "content": (
                        "You are an expert at extracting event information from web pages. "
                        "Write all text fields in Norwegian. "
                        "Dates must be ISO 8601 with the Europe/Oslo offset. "
                        f"event_type must be one of: {', '.join(EVENT_TYPE_SLUGS)}. "
                        "Omit fields that are not present in the content. "
                        "Always respond with a valid JSON object."
                    )
                },
                {
                    "role": "user",
                    "content": (
                        "Extract the event from this content. Respond with a JSON object containing:\n"
                        "- 'title', 'description', 'event_type'\n"
                        "- 'venue_name', 'venue_address', 'city'\n"
                        "- 'start_date', 'end_date' (optional)\n"
                        "- 'is_free', 'price_min', 'price_max' (NOK)\n"
                        "- 'organizer_name', 'organizer_url', 'ticket_url', 'capacity'\n\n"
                        f"URL: {url or 'n/a'}\n\nContent:\n{content}"
                    )
                }
            ]
        )
    except openai.OpenAIError as e:
        logger.error(f"Error in extract_event: {e}")
        raise _failure_from_openai_error(e) from e

    response_text = (response.choices[0].message.content or '').strip()
    result = _extract_json_from_response(response_text)
    if not result:
        logger.error(f"Invalid response format: {response_text}")
        raise ExtractionFailure(ExtractionFailureReason.OTHER, "Invalid response format")

    if url and not result.get('original_url'):
        result['original_url'] = url
    try:
        draft = StructuredEventDraft.model_validate(result)
    except PydanticValidationError as e:
        logger.error(f"Extracted event is incomplete: {e}")
        raise ExtractionFailure(ExtractionFailureReason.OTHER, "Extracted event is incomplete") from e

    logger.info(f"Extracted event '{draft.title}' starting {draft.start_date}")
    return draft

def build_image_prompt(title: str, event_type: str, city: Optional[str] = None) -> str:
    """Prompt for an abstract, text-free event illustration."""
    lines: List[str] = [
        "Create a vibrant, modern illustration for an event poster.",
        "",
        f"Event: {title}",
        f"Type: {event_type}",
    ]
    if city:
        lines.append(f"Location: {city}")
    lines += [
        "",
        "Style: Flat design, colorful, friendly, modern",
        "Mood: Inviting and exciting",
        f"Elements: Abstract shapes representing the {event_type} theme",
        "No text, no people, just abstract artistic representation.",
    ]
    return "\n".join(lines)

def generate_event_image(
    title: str,
    event_type: str,
    city: Optional[str] = None,
    description: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None
) -> str:
    """
    Generate a cover image for an event.

    ``description`` is accepted but not used in the prompt.

    Returns:
        str: URL of the generated image

    Raises:
        ExtractionFailure: If the image service is unavailable or refuses the prompt
    """
    config = config or OpenAIConfig().to_dict()
    client = _client()

    try:
        response = client.images.generate(
            model=config['image_model'],
            prompt=build_image_prompt(title, event_type, city),
            n=1,
            size='1024x1024',
            quality='standard',
            style='vivid'
        )
    except openai.OpenAIError as e:
        logger.error(f"Error in generate_event_image: {e}")
        raise _failure_from_openai_error(e) from e

    image_url = response.data[0].url
    logger.info(f"Generated image for '{title}'")
    return image_url
