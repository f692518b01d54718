"""Small string helpers: combined ids and e-mail domains."""

from __future__ import annotations

ID_SEPARATOR = ":"


def to_combined_id(*keys: str | None, separator: str = ID_SEPARATOR) -> str:
    """Join the non-empty keys with ``separator``, preserving order.

    None and zero-length keys are dropped; whitespace-only keys are kept.

    >>> to_combined_id("tenant", None, "", "user")
    'tenant:user'
    """
    return separator.join(k for k in keys if k)


def get_domain_from_email(address: str | None) -> str | None:
    """Return the part of ``address`` after the last ``@``, or None."""
    if not address:
        return None
    _, at, domain = address.rpartition("@")
    if not at or not domain:
        return None
    return domain
