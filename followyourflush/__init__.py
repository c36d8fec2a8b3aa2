"""
Follow Your Flush - traces a simulated flush from a clicked point to the
wastewater treatment plant that services it, then out through the plant's
outfall into Lake Ontario.
"""

__version__ = "0.1.0"
