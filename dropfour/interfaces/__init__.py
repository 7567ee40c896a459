"""
dropfour.interfaces - User interfaces for dropfour

Terminal front end standing in for the graphical presentation layer.
"""

# Don't import anything here to avoid circular imports
__all__ = []
