"""Prompt-to-filename sanitizer.

Purpose:
    Derive a filesystem- and URL-safe stem from arbitrary chat text so generated
    images can be written locally and re-uploaded without quoting issues.

Transformation:
    1. Truncate to `MAX_SLUG_LENGTH` characters.
    2. Replace every whitespace character and every character in
       `DISALLOWED_CHARACTERS` with `-`, one for one.
    3. Lowercase the result.

Determinism:
    Pure function of its input. Re-sanitizing a slug returns it unchanged.
"""

MAX_SLUG_LENGTH = 220
REPLACEMENT = "-"

DISALLOWED_CHARACTERS = frozenset("/\\:*?\"<>|.,;'!@#$%^&()_=+`~[]{}")


def sanitize(text: str) -> str:
    """Return the slug for `text`.

    Replacement is 1:1. Lowercasing can expand a few characters (for example
    `İ`), so the lowered text is clipped to `MAX_SLUG_LENGTH` again.
    """
    if not text:
        return ""

    text = text[:MAX_SLUG_LENGTH]
    slug = "".join(
        REPLACEMENT if ch.isspace() or ch in DISALLOWED_CHARACTERS else ch
        for ch in text
    )
    return slug.lower()[:MAX_SLUG_LENGTH]
