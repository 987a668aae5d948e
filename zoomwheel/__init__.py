# zoomwheel/__init__.py
"""Zoom-selection control core: button groups and a logarithmic snapping wheel."""
