"""
Post-processing module for webscout.

This module provides result formatting for the tool responses.
"""

from .formatter import (
    FormattingError,
    format_result,
    to_camel_case,
    to_serializable
)

__all__ = [
    'FormattingError',
    'format_result',
    'to_camel_case',
    'to_serializable'
]
