"""Small helpers shared across the client."""
