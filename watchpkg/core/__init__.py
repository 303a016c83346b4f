"""Core state and logic for collecting and dispatching package changes."""
