"""Configuration, layout, menu, icon and log-level logic for a Wayland status bar."""

__version__ = "0.4.0"

__all__ = ["centerbox", "config", "icons", "logspec", "menu"]