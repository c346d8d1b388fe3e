"""Pick the two commits to diff.

Explicit refs win when both are given. Otherwise the triggering event decides:

    pull_request   base = pull_request.base.sha   head = pull_request.head.sha
    push           base = before                  head = after

A single explicit ref is never combined with an event-derived one.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from affected.ci.context import EventContext
from affected.core.errors import MissingRefsError, UnsupportedEventError

log = structlog.get_logger(__name__)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")
PUSH_EVENTS = ("push",)
SUPPORTED_EVENTS = (*PULL_REQUEST_EVENTS, *PUSH_EVENTS)


@dataclass(frozen=True, slots=True)
class RefPair:
    """Diff endpoints. Both are non-empty."""

    base: str
    head: str

    def __post_init__(self) -> None:
        if not self.base or not self.head:
            raise ValueError("RefPair requires non-empty base and head")

    def __str__(self) -> str:
        return f"{self.base}...{self.head}"


def _as_ref(value: object) -> str | None:
    """Non-empty strings pass through unchanged; anything else counts as absent."""
    if isinstance(value, str) and value:
        return value
    return None


def _refs_from_event(event: EventContext) -> tuple[str | None, str | None]:
    if event.event_name in PULL_REQUEST_EVENTS:
        return (
            _as_ref(event.get("pull_request", "base", "sha")),
            _as_ref(event.get("pull_request", "head", "sha")),
        )
    if event.event_name in PUSH_EVENTS:
        return _as_ref(event.get("before")), _as_ref(event.get("after"))
    raise UnsupportedEventError.for_event(event.event_name or "unknown", SUPPORTED_EVENTS)


def resolve_refs(
    base_ref: str | None,
    head_ref: str | None,
    event: EventContext,
) -> RefPair:
    """Resolve base and head for this run.

    Raises:
        UnsupportedEventError: No explicit ref at all and the event kind has no rule.
        MissingRefsError: The event payload lacks base or head, or a lone
            explicit ref came with an event kind that has no rule.
    """
    explicit_base, explicit_head = _as_ref(base_ref), _as_ref(head_ref)

    if explicit_base and explicit_head:
        base, head = explicit_base, explicit_head
    else:
        partial = bool(explicit_base or explicit_head)
        if partial:
            log.warning(
                "partial_explicit_refs_ignored",
                base_ref=explicit_base,
                head_ref=explicit_head,
                event_name=event.event_name,
            )
        try:
            base, head = _refs_from_event(event)
        except UnsupportedEventError:
            if not partial:
                raise
            # Only the explicit side is known; report the other one as missing
            raise MissingRefsError.for_event(
                event.event_name, base=explicit_base, head=explicit_head
            ) from None
        if not base or not head:
            raise MissingRefsError.for_event(event.event_name, base=base, head=head)

    log.info(f"Base commit: {base}")
    log.info(f"Head commit: {head}")
    return RefPair(base=base, head=head)
