"""Feature slices."""
