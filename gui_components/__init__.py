# gui_components/__init__.py
"""Qt helpers for the game library window."""
