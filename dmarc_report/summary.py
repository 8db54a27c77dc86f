from dataclasses import dataclass, field
from typing import Dict

from dmarc_report.evaluation import (
    dkim_aligned,
    dkim_success,
    record_error,
    spf_aligned,
    spf_success,
)
from dmarc_report.model.dmarc_aggregate_report import Feedback, RecordType


def dmarc_compliant(record: RecordType) -> bool:
    return (dkim_aligned(record) and dkim_success(record)) or (
        spf_aligned(record) and spf_success(record)
    )


@dataclass
class ReportSummary:
    """Message counts of a report, each record weighted by its ``count``."""

    total_count: int = 0
    disposition_counts: Dict[str, int] = field(default_factory=dict)
    dmarc_compliant_count: int = 0
    dkim_pass_count: int = 0
    spf_pass_count: int = 0
    dkim_aligned_count: int = 0
    spf_aligned_count: int = 0
    failed_records: int = 0

    def update(self, record: RecordType):
        count = record.row.count or 1
        disposition = record.row.policy_evaluated.disposition
        self.total_count += count
        if disposition not in self.disposition_counts:
            self.disposition_counts[disposition] = 0
        self.disposition_counts[disposition] += count
        if dmarc_compliant(record):
            self.dmarc_compliant_count += count
        if dkim_success(record):
            self.dkim_pass_count += count
        if spf_success(record):
            self.spf_pass_count += count
        if dkim_aligned(record):
            self.dkim_aligned_count += count
        if spf_aligned(record):
            self.spf_aligned_count += count
        if record_error(record) is not None:
            self.failed_records += 1


def summarize(feedback: Feedback) -> ReportSummary:
    summary = ReportSummary()
    for record in feedback.record:
        summary.update(record)
    return summary
