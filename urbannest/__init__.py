"""
UrbanNest property rental listing API.
"""

__version__ = "1.0.0"
