"""
Media Organizer - sort camera media into a dated library.

Moves photos, videos and audio recordings off removable storage into a
``Category/YYYY/YYYY-MM/YYYY-MM-DD`` tree based on file modification dates.
"""

__version__ = "1.0.0"
