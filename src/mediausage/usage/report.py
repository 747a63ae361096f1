"""Grouping of usage matches for display."""

from __future__ import annotations

from collections.abc import Callable

from mediausage.usage.finder import UsageMatch

LabelResolver = Callable[[str], str | None]

GroupedReport = dict[str, list[UsageMatch]]


def _fallback_label(tag: str) -> str:
    # Upper-case the first character only ("in-review" -> "In-review")
    return tag[:1].upper() + tag[1:]


def status_label(status: str, label_for: LabelResolver | None = None) -> str:
    """Human-readable label for a status tag.

    Without a resolver the built-in status labels are used.
    """
    if label_for is None:
        from mediausage.store.base import STATUS_LABELS

        label_for = STATUS_LABELS.get
    return label_for(status) or _fallback_label(status)


def type_label(type_tag: str, label_for_type: LabelResolver | None = None) -> str:
    """Human-readable label for a record type."""
    if label_for_type is None:
        from mediausage.store.base import TYPE_LABELS

        label_for_type = TYPE_LABELS.get
    return label_for_type(type_tag) or _fallback_label(type_tag)


def group_by_status(
    matches: list[UsageMatch],
    label_for: LabelResolver | None = None,
) -> GroupedReport:
    """Group matches under their status label.

    Groups appear in the order their status is first seen; matches keep
    their incoming order within a group.

    Args:
        matches: Matches as returned by UsageFinder.find_usage
        label_for: Status label resolver (e.g. ``store.label_for``); the
            built-in status labels when omitted

    Returns:
        Mapping of status label to matches
    """
    report: GroupedReport = {}
    for match in matches:
        label = status_label(match.status, label_for)
        report.setdefault(label, []).append(match)
    return report


def report_to_dict(
    report: GroupedReport,
    label_for_type: LabelResolver | None = None,
) -> dict[str, list[dict[str, str]]]:
    """JSON-ready form of a grouped report."""
    output: dict[str, list[dict[str, str]]] = {}
    for label, matches in report.items():
        entries = []
        for match in matches:
            entry = match.to_dict()
            entry["type_label"] = type_label(match.type, label_for_type)
            entries.append(entry)
        output[label] = entries
    return output
