"""
Watchlog

Personal catalog of watched titles and their replay history.
"""

__version__ = "1.0.0"
