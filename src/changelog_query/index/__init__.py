"""Record indexes keyed by exact timestamp.

TimestampIndex is the unbalanced BST multimap the query pipeline uses
for date filters. LinearScanIndex is the list-based baseline with the
same contract.
"""
from changelog_query.index.base import RecordIndexBase, SkippedRecord
from changelog_query.index.dates import ParseError, format_timestamp, parse_timestamp
from changelog_query.index.linear_scan import LinearScanIndex
from changelog_query.index.timestamp_index import TimestampIndex, TreeNode

__all__ = [
    "LinearScanIndex",
    "ParseError",
    "RecordIndexBase",
    "SkippedRecord",
    "TimestampIndex",
    "TreeNode",
    "format_timestamp",
    "parse_timestamp",
]
