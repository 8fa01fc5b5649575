"""Rule-based lexical content filter.

Purpose:
    Decide whether a chat prompt contains any configured bad word before it is
    sent to the generation service.

Validation model:
    - Case-insensitive substring matching, no classifier/model inference.
    - The word list lives on `RuntimeConfig.bad_words` and is passed in by the
      caller.

Blocking behavior:
    - `True`: the caller replaces the prompt with `RuntimeConfig.bad_words_prompt`
      and still runs the generation. Requests are never refused here.
    - `False`: the prompt is used as given.

Bypass risk:
    Substring matching misses obfuscation, spacing tricks and misspellings.

Performance:
    Linear in the number of words times input length, no I/O.
"""

from typing import Iterable


def is_blocked(text: str, bad_words: Iterable[str]) -> bool:
    """Return whether `text` contains any of `bad_words`, ignoring case.

    Empty or whitespace-only entries in `bad_words` are skipped; they would
    otherwise match every prompt.
    """
    if not text:
        return False

    lowered = text.lower()
    for word in bad_words:
        if not word.strip():
            continue
        if word.lower() in lowered:
            return True

    return False
