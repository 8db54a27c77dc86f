from dataclasses import dataclass, field
from typing import List, Optional

from dmarc_report.timestamp import EpochTimestamp

# Field names are the element names of the aggregate report schema. Policy and
# result values are kept as the strings found in the document; they are not
# validated against the enumerations of RFC 7489.


@dataclass(frozen=True)
class DateRangeType:
    begin: Optional[EpochTimestamp] = field(
        default=None,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    end: Optional[EpochTimestamp] = field(
        default=None,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class ReportMetadataType:
    org_name: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    email: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    extra_contact_info: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    report_id: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    date_range: DateRangeType = field(
        default_factory=DateRangeType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class PolicyPublishedType:
    domain: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    adkim: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    aspf: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    p: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    sp: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    # None if the element is absent, which is not the same as 0
    pct: Optional[int] = field(
        default=None,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class PolicyEvaluatedType:
    disposition: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    dkim: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    spf: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class RowType:
    source_ip: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    count: int = field(
        default=0,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    policy_evaluated: PolicyEvaluatedType = field(
        default_factory=PolicyEvaluatedType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class IdentifierType:
    header_from: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class DkimauthResultType:
    domain: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    result: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    selector: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class SpfauthResultType:
    domain: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    result: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    scope: str = field(
        default="",
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class AuthResultType:
    dkim: DkimauthResultType = field(
        default_factory=DkimauthResultType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    spf: SpfauthResultType = field(
        default_factory=SpfauthResultType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class RecordType:
    row: RowType = field(
        default_factory=RowType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    identifiers: IdentifierType = field(
        default_factory=IdentifierType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    auth_results: AuthResultType = field(
        default_factory=AuthResultType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )


@dataclass(frozen=True)
class Feedback:
    class Meta:
        name = "feedback"

    report_metadata: ReportMetadataType = field(
        default_factory=ReportMetadataType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    policy_published: PolicyPublishedType = field(
        default_factory=PolicyPublishedType,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
    record: List[RecordType] = field(
        default_factory=list,
        metadata={
            "type": "Element",
            "namespace": "",
        },
    )
