"""Reduce enriched pull requests into summary statistics."""

from __future__ import annotations

import typing as typ

from .models import RepositoryCounts, StatsSummary

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import EnrichedItem


def summarize(items: cabc.Sequence[EnrichedItem]) -> StatsSummary:
    """Compute a :class:`StatsSummary` for ``items``.

    Repositories appear in ``repos`` in order of first occurrence. The
    function performs no I/O and never fails on well-typed input.
    """
    merged = 0
    closed_unmerged = 0
    open_count = 0
    # repo -> [total, merged]
    per_repo: dict[str, list[int]] = {}

    for item in items:
        if item.merged:
            merged += 1
        elif item.state == "closed":
            closed_unmerged += 1
        if item.state == "open":
            open_count += 1

        counters = per_repo.setdefault(item.repo, [0, 0])
        counters[0] += 1
        if item.merged:
            counters[1] += 1

    return StatsSummary(
        total_prs=len(items),
        merged_prs=merged,
        closed_prs=closed_unmerged,
        open_prs=open_count,
        repos={
            repo: RepositoryCounts(total=total, merged=merged_count)
            for repo, (total, merged_count) in per_repo.items()
        },
    )
