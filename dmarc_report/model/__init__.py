from .dmarc_aggregate_report import (
    AuthResultType,
    DateRangeType,
    DkimauthResultType,
    Feedback,
    IdentifierType,
    PolicyEvaluatedType,
    PolicyPublishedType,
    RecordType,
    ReportMetadataType,
    RowType,
    SpfauthResultType,
)

__all__ = [
    "AuthResultType",
    "DateRangeType",
    "DkimauthResultType",
    "Feedback",
    "IdentifierType",
    "PolicyEvaluatedType",
    "PolicyPublishedType",
    "RecordType",
    "ReportMetadataType",
    "RowType",
    "SpfauthResultType",
]
