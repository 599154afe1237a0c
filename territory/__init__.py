"""
Territory Manager: exclusive ZIP-code territories and event conflict detection.
"""

__version__ = "1.0.0"
