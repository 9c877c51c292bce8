"""Git scanning and commit message generation server for the metaGOTHIC dashboard."""

__version__ = "1.0.0"
