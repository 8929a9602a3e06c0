"""Domain services grouped by business area."""
