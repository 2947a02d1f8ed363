"""
Repository layer: a document repository with post-operation hooks.

Usage:
    from unique_validation.repositories import DocumentRepository
"""

from .document_repository import DocumentRepository
from .hooks import PostHookRegistry, post_hook_handler

__all__ = [
    "DocumentRepository",
    "PostHookRegistry",
    "post_hook_handler",
]
