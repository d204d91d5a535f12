"""Diagnostics package.

- phase_spacing: gaps between consecutive phase events (needs the 'diagnostics' extra)
"""

__all__ = ["phase_spacing"]
