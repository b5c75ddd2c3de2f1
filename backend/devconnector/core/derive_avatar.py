"""Avatar Derivation — deterministic Gravatar reference for an e-mail address."""

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE = "https://www.gravatar.com/avatar"

# size 200px, PG rating, "mystery man" fallback
DEFAULT_OPTIONS = {"s": "200", "r": "pg", "d": "mm"}


def derive_avatar(email: str, options: dict[str, str] | None = None) -> str:
    """Gravatar URL keyed by the md5 of the trimmed, lower-cased address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode(options or DEFAULT_OPTIONS)
    return f"{GRAVATAR_BASE}/{digest}?{query}"
