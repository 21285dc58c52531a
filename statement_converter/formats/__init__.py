"""
Formats package for dialect line parsers.
"""

from .base import BaseLineParser, LineResult
from .tabbed import TabbedParser
from .spaced import SpacedParser
from .bracketed import BracketedParser

__all__ = ['BaseLineParser', 'LineResult', 'TabbedParser', 'SpacedParser', 'BracketedParser']
