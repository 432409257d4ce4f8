"""convcheck — enforce branch-name and commit-message conventions."""

__version__ = "0.1.0"
