"""PySide6 desktop console for the heroes service."""
