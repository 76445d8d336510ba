from __future__ import annotations


class LayoutError(Exception):
    pass


class InvalidConfiguration(LayoutError, ValueError):
    """Rejected design or child configuration, raised before any layout pass runs."""


class SceneNotFoundError(LayoutError, FileNotFoundError):
    pass
