"""Page and API route modules."""
