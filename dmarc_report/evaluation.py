"""Checks of the per record verdicts found in an aggregate report.

The alignment verdicts (``row/policy_evaluated``) and the authentication
results (``auth_results``) are read independently; a report is not assumed to
be consistent between the two.
"""
from typing import Callable, Optional, Sequence, Tuple

from dmarc_report.errors import CheckFailure, PolicyFailure
from dmarc_report.model.dmarc_aggregate_report import Feedback, RecordType


def final_disposition_success(record: RecordType) -> bool:
    """True if the receiver took no action on the messages.

    This does not take the published policy into account: a ``quarantine``
    caused by ``pct`` sampling is reported as a failure as well.
    """
    return record.row.policy_evaluated.disposition == "none"


def dkim_aligned(record: RecordType) -> bool:
    """True if the RFC5322.From domain matches the ``d=`` domain of a DKIM signature."""
    return record.row.policy_evaluated.dkim == "pass"


def spf_aligned(record: RecordType) -> bool:
    """True if the RFC5322.From domain matches the RFC5321.MailFrom domain."""
    return record.row.policy_evaluated.spf == "pass"


def dkim_success(record: RecordType) -> bool:
    return record.auth_results.dkim.result == "pass"


def spf_success(record: RecordType) -> bool:
    return record.auth_results.spf.result == "pass"


RECORD_CHECKS: Sequence[Tuple[Callable[[RecordType], bool], str]] = (
    (final_disposition_success, "DMARC disposition failed"),
    (dkim_aligned, "DKIM is not aligned"),
    (spf_aligned, "SPF is not aligned"),
    (dkim_success, "DKIM authentication failed"),
    (spf_success, "SPF authentication failed"),
)


def record_error(record: RecordType) -> Optional[PolicyFailure]:
    """Return the failed checks of ``record``, or ``None`` if all of them pass."""
    failure = PolicyFailure(f"Failure for source IP {record.row.source_ip}:")
    for check, reason in RECORD_CHECKS:
        if not check(record):
            failure.errors.append(CheckFailure(check.__name__, reason))
    return failure.error_or_none()


def aggregate_error(feedback: Feedback) -> Optional[PolicyFailure]:
    """Return the failures of all failing records in document order, or ``None``."""
    failure = PolicyFailure("Some record failed:")
    for record in feedback.record:
        error = record_error(record)
        if error is not None:
            failure.errors.append(error)
    return failure.error_or_none()
