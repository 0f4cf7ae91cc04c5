"""skel -- make new projects from skeleton definitions."""

__version__ = "0.1.0"
