"""End-of-shift till counts and their manager verification."""
