"""Footprint Arch Index analyzer.

Segments a photographed footprint into forefoot, midfoot and rearfoot
regions and classifies the arch from the midfoot share of the contact area.
"""

__version__ = "1.0.0"
