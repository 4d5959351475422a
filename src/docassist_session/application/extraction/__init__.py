"""Payload extraction and 401 classification helpers."""

from .token_extraction import (
    PathExtractor,
    ExtractionChain,
    default_token_chain,
    default_user_chain,
)
from .expiry_classifier import ExpiryClassifier

__all__ = [
    "PathExtractor",
    "ExtractionChain",
    "default_token_chain",
    "default_user_chain",
    "ExpiryClassifier",
]
