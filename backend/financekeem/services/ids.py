"""
Record ids and public URL slugs
"""
import re
import secrets
import uuid

SLUG_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
SLUG_TOKEN_LENGTH = 6

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def new_id() -> str:
    """Opaque unique record id"""
    return str(uuid.uuid4())


def slugify(name: str) -> str:
    """'Protection Clarity Call!' -> 'protection-clarity-call'"""
    return _NON_ALNUM.sub("-", (name or "").lower()).strip("-")


def new_slug(name: str) -> str:
    """URL-safe slug from a display name plus a short random token"""
    token = "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_TOKEN_LENGTH))
    base = slugify(name)
    return f"{base}-{token}" if base else token
