"""External service configurations."""

from .openai import (
    OpenAIConfig,
    init_openai_client
)

__all__ = [
    'OpenAIConfig',
    'init_openai_client'
]
