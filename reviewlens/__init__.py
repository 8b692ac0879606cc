"""ReviewLens - per-listing guest review analytics."""
