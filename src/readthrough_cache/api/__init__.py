"""HTTP API for the read-through cache."""
