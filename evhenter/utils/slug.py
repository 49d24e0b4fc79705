"""Slug generation for event URLs."""

import re
import unicodedata
import uuid

# Norwegian letters that NFKD does not decompose
_TRANSLITERATIONS = str.maketrans({
    'æ': 'ae', 'ø': 'o', 'å': 'a',
    'Æ': 'ae', 'Ø': 'o', 'Å': 'a',
})

def slugify(text: str, max_length: int = 80) -> str:
    """Lowercase, ASCII-only, hyphen separated."""
    text = text.translate(_TRANSLITERATIONS)
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = re.sub(r'[^a-zA-Z0-9]+', '-', text).strip('-').lower()
    return text[:max_length].rstrip('-') or 'event'

def unique_slug(title: str) -> str:
    """Slug for ``title`` with a short random suffix."""
    return f"{slugify(title)}-{uuid.uuid4().hex[:6]}"
