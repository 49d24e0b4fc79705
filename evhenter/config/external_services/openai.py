"""OpenAI service configuration."""

import os
from typing import Dict, Any, Optional
import httpx
from openai import OpenAI
from dataclasses import dataclass

@dataclass
class OpenAIConfig:
    """OpenAI configuration settings."""

    # API configuration
    api_key: str = ""
    model: str = 'gpt-4o-mini'
    image_model: str = 'dall-e-3'
    temperature: float = 0.2
    max_tokens: int = 1200
    timeout: float = 30.0

    def __post_init__(self):
        """Load API key and model overrides from environment if not provided."""
        if not self.api_key:
            self.api_key = os.environ.get('OPENAI_API_KEY', '')
        self.model = os.environ.get('OPENAI_MODEL', self.model)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            'api_key': self.api_key,
            'model': self.model,
            'image_model': self.image_model,
            'temperature': self.temperature,
            'max_tokens': self.max_tokens,
            'timeout': self.timeout
        }

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")
        return True

# Module-level singleton instance
_openai: Optional[OpenAI] = None

def init_openai_client() -> OpenAI:
    """Initialize OpenAI client with API key and custom configuration.

    Returns:
        OpenAI: Configured OpenAI client instance

    Raises:
        ValueError: If OPENAI_API_KEY environment variable is not set
    """
    global _openai

    if _openai is None:
        config = OpenAIConfig()
        config.validate()

        # Plain httpx client so environment proxy settings are not picked up
        http_client = httpx.Client(timeout=config.timeout)
        _openai = OpenAI(api_key=config.api_key, http_client=http_client)

    return _openai
