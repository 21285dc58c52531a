"""
Helpers shared by the dialect parsers.
"""
