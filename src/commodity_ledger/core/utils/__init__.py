"""Small utilities used across the package."""
