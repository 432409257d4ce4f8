"""Git hook management."""

from convcheck.hooks.installer import install_hook, uninstall_hook

__all__ = ["install_hook", "uninstall_hook"]
