"""
PyQt6 views for circuitlab.

Qt widgets are imported from their modules directly (GUI.main_window,
GUI.circuit_canvas, ...) so that GUI.format_utils stays importable on a
headless install.
"""

GRID_SIZE = 10

__all__ = ['GRID_SIZE']
