"""Core URL resolution and token derivation."""
