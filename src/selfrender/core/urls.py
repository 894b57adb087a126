"""URL joining for resources served by this application."""


def is_absolute(path: str) -> bool:
    """Check whether a resource path is already a full URL.

    Any path starting with "http" (case-insensitive) counts as absolute.
    """
    return path.lower().startswith("http")


def combine(base_url: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one "/" between them.

    No other normalization is applied: no percent-encoding, no query merging.

    Args:
        base_url: Resolved base URL (e.g., "https://example.com/")
        path: Relative resource path (e.g., "/emails/welcome")

    Returns:
        Absolute URL (e.g., "https://example.com/emails/welcome")
    """
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
