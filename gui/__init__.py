# ================================
# file: gui/__init__.py
# ================================
"""Display sinks. The matplotlib Visualizer is imported from gui.visualizer
on demand so headless runs never touch a GUI backend.
"""
from .display import DisplaySink, HeadlessDisplay

__all__ = ["DisplaySink", "HeadlessDisplay"]
