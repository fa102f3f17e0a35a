"""Internal utilities for mdbundle."""
