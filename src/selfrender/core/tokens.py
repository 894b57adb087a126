"""Email token derivation.

An email token is ``base64(md5(salt + path))`` over the UTF-8 bytes of the
concatenation. It is deterministic and bound to a single resource path.
MD5 is kept for compatibility with existing token consumers; it is not a
keyed MAC and only suits non-adversarial request correlation.
"""

import base64
import hmac
from hashlib import md5

EMAIL_TOKEN_HEADER = "email-token"


def build_email_token(salt: str, path: str) -> str:
    """Derive the email token for a resource path.

    Args:
        salt: Configured hash salt (may be empty)
        path: Resource path exactly as passed by the caller

    Returns:
        Base64-encoded 128-bit digest
    """
    digest = md5((salt + path).encode("utf-8"), usedforsecurity=False).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_email_token(salt: str, path: str, token: str) -> bool:
    """Check a received token against the one derived for ``path``."""
    expected = build_email_token(salt, path)
    return hmac.compare_digest(expected.encode("ascii"), token.encode("utf-8"))
