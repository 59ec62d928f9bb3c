"""Detection of ``@handle`` references in free text."""

import re

MENTION_PATTERN = re.compile(r"@(\w+)", re.ASCII)


def detect_mentions(text: object) -> list[str]:
    """Return the distinct handles mentioned in ``text``.

    Handles keep their original case and are ordered by first occurrence,
    e.g. ``"@alice hi @bob @alice"`` gives ``["alice", "bob"]``. Anything
    that is not a non-empty string yields an empty list.
    """
    if not isinstance(text, str) or not text:
        return []

    # dict preserves insertion order
    return list(dict.fromkeys(MENTION_PATTERN.findall(text)))
