# ABOUTME: Formatting-richness score for book descriptions.
# ABOUTME: Breaks ties between descriptions from different sources during merging.

import re

# Opening tags of the lightweight formatting the renderer keeps.
_FORMAT_MARKER_RE = re.compile(r"<(p|br|b|strong|i|em)\b", re.IGNORECASE)


def score_description(text: str | None) -> int:
    """Count formatting markers in a description; plain text scores 0."""
    if not text:
        return 0
    return len(_FORMAT_MARKER_RE.findall(str(text)))


def pick_richer(base: str | None, extra: str | None) -> str | None:
    """Prefer the better-formatted description, then the longer one, then base."""
    if not base:
        return extra if extra is not None else base
    if not extra:
        return base

    base_score = score_description(base)
    extra_score = score_description(extra)
    if extra_score != base_score:
        return extra if extra_score > base_score else base
    return extra if len(extra) > len(base) else base
