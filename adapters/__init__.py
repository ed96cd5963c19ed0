"""
Adapters package - External service connections.
Generative-AI client and transactional email.
"""

from adapters import gemini_adapter, mail_adapter

__all__ = [
    "gemini_adapter",
    "mail_adapter",
]
