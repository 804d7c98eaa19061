"""Domain layer - credential records and expiry classification."""
