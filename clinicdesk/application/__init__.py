"""Application layer: use cases and collaborator contracts."""
