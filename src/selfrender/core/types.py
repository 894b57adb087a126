"""Core type definitions."""

from collections.abc import Callable

# Predicate applied to raw address strings (e.g., "https://0.0.0.0:8443")
# Must accept malformed strings without raising
AddressPredicate = Callable[[str], bool]
