from dmarc_report.decoding import (
    decode,
    decode_email,
    decode_file,
    decode_gzip,
    decode_zip,
    validate,
    validate_file,
    validate_gzip,
    validate_zip,
)
from dmarc_report.errors import (
    CheckFailure,
    ContainerError,
    DecodeError,
    MalformedFieldError,
    NotFoundError,
    ParseError,
    PolicyFailure,
    ReportError,
    ReportExtractionError,
)
from dmarc_report.evaluation import aggregate_error, record_error
from dmarc_report.model import Feedback, RecordType

__all__ = [
    "CheckFailure",
    "ContainerError",
    "DecodeError",
    "Feedback",
    "MalformedFieldError",
    "NotFoundError",
    "ParseError",
    "PolicyFailure",
    "RecordType",
    "ReportError",
    "ReportExtractionError",
    "aggregate_error",
    "decode",
    "decode_email",
    "decode_file",
    "decode_gzip",
    "decode_zip",
    "record_error",
    "validate",
    "validate_file",
    "validate_gzip",
    "validate_zip",
]
