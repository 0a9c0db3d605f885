"""Core ports (Protocols) and application state."""
