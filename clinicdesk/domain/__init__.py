"""Domain layer: entities, errors and result envelopes."""
