"""Infrastructure layer: persistence, security and realtime helpers."""
