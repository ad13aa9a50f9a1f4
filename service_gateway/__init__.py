"""AciTracker Gateway service package."""
