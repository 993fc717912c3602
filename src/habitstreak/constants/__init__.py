"""Static application data."""
