"""Hostname utilities for turning config tokens into lookup names."""

import re


# Labels of 1-63 alphanumerics/hyphens, at least one dot, alphabetic TLD
FQDN_PATTERN = re.compile(
    r"^([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
)

APEX_TOKEN = "@"


def strip_root_dot(token: str) -> str:
    """Remove a single trailing root dot from a hostname token.

    Args:
        token: Hostname as written in the config (may end with ".").

    Returns:
        str: Token without the trailing dot.

    Examples:
        >>> strip_root_dot("mail.example.com.")
        'mail.example.com'
        >>> strip_root_dot("@")
        '@'
    """
    if token.endswith("."):
        return token[:-1]
    return token


def is_fqdn(hostname: str) -> bool:
    """Check whether a hostname already looks fully qualified.

    Examples:
        >>> is_fqdn("sub.example.com")
        True
        >>> is_fqdn("mail")
        False
        >>> is_fqdn("_dmarc.example.com")
        False
    """
    return bool(FQDN_PATTERN.match(hostname))


def normalize_hostname(token: str, domain: str) -> str:
    """Build the fully-qualified lookup name for a config host token.

    "@" is the apex, anything that already looks like an FQDN is kept,
    everything else is a label relative to the base domain.

    Args:
        token: Host token from the config line.
        domain: Base domain of the check session.

    Returns:
        str: Fully-qualified name to resolve.

    Examples:
        >>> normalize_hostname("@", "example.com")
        'example.com'
        >>> normalize_hostname("mail", "example.com")
        'mail.example.com'
        >>> normalize_hostname("sub.example.com", "example.com")
        'sub.example.com'
    """
    if token == APEX_TOKEN:
        return domain
    if is_fqdn(token):
        return token
    return f"{token}.{domain}"


def qualify_hostname(token: str, domain: str) -> str:
    """Qualify a host token, trusting tokens that already contain the domain.

    Args:
        token: Host token from the config line.
        domain: Base domain of the check session.

    Returns:
        str: Lookup name without a trailing dot.

    Examples:
        >>> qualify_hostname("www.example.com.", "example.com")
        'www.example.com'
        >>> qualify_hostname("blog", "example.com")
        'blog.example.com'
    """
    if domain in token:
        return strip_root_dot(token)
    return normalize_hostname(strip_root_dot(token), domain)


def address_record_name(token: str, domain: str) -> str:
    """Lookup name for an A record host token.

    A leading "www." marks a subdomain label (often added for certificate
    issuance, e.g. "www.shop"), which the FQDN heuristic cannot tell apart
    from a full name, so it is always appended to the domain.

    Examples:
        >>> address_record_name("www.shop", "example.com")
        'www.shop.example.com'
        >>> address_record_name("www", "example.com")
        'www.example.com'
    """
    token = strip_root_dot(token)
    if token.startswith("www."):
        return f"{token}.{domain}"
    return normalize_hostname(token, domain)
