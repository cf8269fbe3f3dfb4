"""Bottom-up profile model."""
