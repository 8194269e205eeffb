"""Typed schemas for the two GitHub REST responses MergeStats consumes.

Responses are decoded into builtins first so error bodies can be recognised,
then converted into these structs with :func:`msgspec.convert`. Unknown
fields are ignored; missing or mistyped fields raise
:class:`msgspec.ValidationError`.
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003
import typing as typ

import msgspec

PullRequestState = typ.Literal["open", "closed"]


class RawResultItem(msgspec.Struct, kw_only=True, frozen=True):
    """One pull request as returned by the issue search endpoint.

    The search endpoint's ``state`` is not authoritative for merges, so only
    identifying fields are kept here.
    """

    title: str
    number: int
    repository_url: str
    html_url: str
    created_at: dt.datetime


class SearchPage(msgspec.Struct, kw_only=True, frozen=True):
    """Envelope of one search results page.

    ``items`` stays untyped so a single malformed result can be skipped
    without rejecting the page.
    """

    items: list[typ.Any]
    total_count: int = 0
    incomplete_results: bool = False


class PullRequestDetail(msgspec.Struct, kw_only=True, frozen=True):
    """Authoritative merge state from the pull request detail endpoint."""

    merged: bool
    state: PullRequestState
    merged_at: dt.datetime | None = None
    closed_at: dt.datetime | None = None

    def __post_init__(self) -> None:
        """Reject details claiming a merge on a pull request still open."""
        if self.merged and self.state != "closed":
            msg = "merged pull request must be closed"
            raise ValueError(msg)


def parse_search_page(payload: object) -> SearchPage:
    """Convert a decoded search response into a :class:`SearchPage`."""
    return msgspec.convert(payload, SearchPage)


def parse_search_item(payload: object) -> RawResultItem:
    """Convert one decoded search result into a :class:`RawResultItem`."""
    return msgspec.convert(payload, RawResultItem)


def parse_pull_request_detail(payload: object) -> PullRequestDetail:
    """Convert a decoded detail response into a :class:`PullRequestDetail`."""
    return msgspec.convert(payload, PullRequestDetail)


__all__ = [
    "PullRequestDetail",
    "PullRequestState",
    "RawResultItem",
    "SearchPage",
    "parse_pull_request_detail",
    "parse_search_item",
    "parse_search_page",
]
