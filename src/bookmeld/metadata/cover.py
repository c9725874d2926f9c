# ABOUTME: Cover image ranking, deduplication, and best-URL selection across sources.
# ABOUTME: Holds the per-source rank tables that place every cover on one quality scale.

import re
from collections.abc import Iterable, Mapping
from typing import Protocol

from bookmeld.metadata.types import CoverSelection, CoverVariant

# Ranks share one scale so a new source can be slotted in by picking a number.
# Google Books imageLinks keys, best first: (key, descriptor, rank).
GOOGLE_COVER_RANKS: tuple[tuple[str, str, int], ...] = (
    ("extraLarge", "3x", 9),
    ("large", "2x", 7),
    ("medium", "1.5x", 5),
    ("small", "1x", 3),
    ("thumbnail", "1x", 2),
    ("smallThumbnail", "1x", 1),
)

# Open Library cover sizes: (key, size suffix, descriptor, rank).
OPENLIBRARY_COVER_RANKS: tuple[tuple[str, str, str, int], ...] = (
    ("small", "S", "1x", 2),
    ("medium", "M", "1.5x", 4),
    ("large", "L", "2x", 6),
)

MANUAL_COVER_RANK = 10
MANUAL_COVER_DESCRIPTOR = "1x"

# Heuristic ranks for a bare URL whose source did not report a rank.
_INFERRED_LARGE_RANK = 6
_INFERRED_MEDIUM_RANK = 4
_INFERRED_DEFAULT_RANK = 2

OPENLIBRARY_COVERS_BASE = "https://covers.openlibrary.org/b/id"

_HTTP_SCHEME_RE = re.compile(r"^http://", re.IGNORECASE)


class RankedCover(Protocol):
    """Anything carrying a cover URL and an optional explicit rank."""

    cover: str
    cover_rank: int | None


def normalize_cover_url(value: str | None) -> str:
    """Upgrade an http:// URL to https://; None becomes an empty string."""
    if not value:
        return ""
    return _HTTP_SCHEME_RE.sub("https://", str(value))


def select_from_variants(
    raw_variants: Iterable[CoverVariant | tuple[str, str, int]],
) -> CoverSelection:
    """Build a cover selection from a source's raw (url, descriptor, rank) entries.

    Entries without a URL or descriptor are ignored. For each descriptor only
    the highest-ranked variant survives; the set is ordered by ascending rank
    and its last entry is the selected cover.
    """
    by_descriptor: dict[str, CoverVariant] = {}
    for raw in raw_variants:
        if isinstance(raw, CoverVariant):
            url, descriptor, rank = raw.url, raw.descriptor, raw.rank
        else:
            url, descriptor, rank = raw
        if not url or not descriptor:
            continue
        existing = by_descriptor.get(descriptor)
        if existing is None or rank > existing.rank:
            by_descriptor[descriptor] = CoverVariant(
                url=normalize_cover_url(url), descriptor=descriptor, rank=rank
            )

    cover_set = tuple(sorted(by_descriptor.values(), key=lambda variant: variant.rank))
    if not cover_set:
        return CoverSelection()
    best = cover_set[-1]
    return CoverSelection(url=best.url, rank=best.rank, cover_set=cover_set)


def select_google_cover(image_links: Mapping[str, str] | None) -> CoverSelection:
    """Rank the imageLinks block of a Google Books volume.

    A block that is not a mapping is treated as missing.
    """
    links = image_links if isinstance(image_links, Mapping) else {}
    return select_from_variants(
        (links[key], descriptor, rank)
        for key, descriptor, rank in GOOGLE_COVER_RANKS
        if links.get(key)
    )


def select_openlibrary_cover(
    details_cover: Mapping[str, str] | None,
    cover_id: int | str | None = None,
    covers_base: str = OPENLIBRARY_COVERS_BASE,
) -> CoverSelection:
    """Rank Open Library cover links.

    Direct links from a books-endpoint entry win; when there are none, URLs
    are built from the numeric cover id a search result carries. A cover
    value that is not a mapping counts as no direct links.
    """
    raw: list[tuple[str, str, int]] = []
    if isinstance(details_cover, Mapping) and details_cover:
        for key, _suffix, descriptor, rank in OPENLIBRARY_COVER_RANKS:
            raw.append((details_cover.get(key) or "", descriptor, rank))
    elif cover_id:
        for _key, suffix, descriptor, rank in OPENLIBRARY_COVER_RANKS:
            raw.append((f"{covers_base}/{cover_id}-{suffix}.jpg", descriptor, rank))

    seen: set[str] = set()
    unique: list[tuple[str, str, int]] = []
    for url, descriptor, rank in raw:
        normalized = normalize_cover_url(url)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        unique.append((normalized, descriptor, rank))
    return select_from_variants(unique)


def infer_cover_rank(url: str | None) -> int:
    """Guess a rank from the URL when the source did not supply one."""
    if not url:
        return 0
    if "-L." in url or "large" in url:
        return _INFERRED_LARGE_RANK
    if "-M." in url or "medium" in url:
        return _INFERRED_MEDIUM_RANK
    return _INFERRED_DEFAULT_RANK


def _effective_rank(value: RankedCover) -> int:
    if isinstance(value.cover_rank, int):
        return value.cover_rank
    return infer_cover_rank(value.cover)


def pick_best_cover_url(base: RankedCover | None, extra: RankedCover | None) -> str:
    """Choose the better of two covers; ties go to base."""
    if base is None and extra is None:
        return ""
    if base is None or not base.cover:
        return normalize_cover_url(extra.cover) if extra is not None else ""
    if extra is None or not extra.cover:
        return normalize_cover_url(base.cover)
    if _effective_rank(extra) > _effective_rank(base):
        return normalize_cover_url(extra.cover)
    return normalize_cover_url(base.cover)
