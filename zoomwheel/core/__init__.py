# zoomwheel/core/__init__.py
