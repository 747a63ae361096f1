"""
Media usage detection.

Provides tools for:
- Finding content that references a media file
- Flattening nested and serialized metadata for searching
- Grouping matches by publication status
"""

from mediausage.usage.finder import MatchSource, UsageFinder, UsageMatch
from mediausage.usage.report import GroupedReport, group_by_status, report_to_dict, type_label
from mediausage.usage.values import Composite, Scalar, Value, flatten

__all__ = [
    "UsageFinder",
    "UsageMatch",
    "MatchSource",
    "GroupedReport",
    "group_by_status",
    "report_to_dict",
    "type_label",
    "Scalar",
    "Composite",
    "Value",
    "flatten",
]
