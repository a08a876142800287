"""Parent Helm chart updater for multi-controller operator projects."""

__version__ = "0.1.0"
