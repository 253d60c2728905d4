"""
Survey Admin Console
Session-gated, searchable, paginated browser for submitted surveys
"""

__version__ = "1.0.0"
