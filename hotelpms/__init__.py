"""
Hotel property management: reservation timeline and room calendar.
"""

__version__ = "0.1.0"
