"""
Input validation package.
"""

from .validators import (
    SecurityValidator,
    DataValidator,
    BankDetailsValidator,
    clean_text,
    optional,
)
from .middleware import RequestSizeMiddleware, SecurityHeadersMiddleware

__all__ = [
    'SecurityValidator',
    'DataValidator',
    'BankDetailsValidator',
    'clean_text',
    'optional',
    'RequestSizeMiddleware',
    'SecurityHeadersMiddleware',
]
