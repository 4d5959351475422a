"""Version information for docassist-session."""

__version__ = "0.3.0"
