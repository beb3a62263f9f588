"""
slotbook - bookable meeting slots across timezones.
"""

__version__ = "0.1.0"
