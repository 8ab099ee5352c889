"""Toggles - feature flag evaluation engine with a TTL cache."""
