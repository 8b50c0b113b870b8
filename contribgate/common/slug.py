"""Repository slug parsing.

Slugs are GitHub identifiers in ``owner/name`` form. They are not filesystem
paths even though they use ``/`` as a separator, so parse them here rather
than with ``pathlib``.
"""

from __future__ import annotations


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Split an ``owner/name`` slug into its two parts.

    Surrounding whitespace is ignored.

    Raises
    ------
    ValueError
        If the slug does not contain exactly one ``/`` with text on both sides.

    Examples
    --------
    >>> parse_repo_slug("acme/core")
    ('acme', 'core')

    """
    text = slug.strip()
    owner, sep, name = text.partition("/")
    if not sep or not owner or not name or "/" in name:
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)
    return owner, name
