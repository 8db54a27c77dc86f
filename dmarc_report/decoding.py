import gzip
import io
import os.path
import zlib
from datetime import datetime
from email.contentmanager import raw_data_manager
from email.message import EmailMessage
from typing import Any, BinaryIO, Callable, Dict, Generator, Mapping, Optional, Union
from zipfile import BadZipFile, ZipFile

import structlog
from xsdata.exceptions import ConverterError, ConverterWarning, ParserError
from xsdata.formats.dataclass.context import XmlContext
from xsdata.formats.dataclass.parsers.config import ParserConfig
from xsdata.formats.dataclass.parsers.xml import XmlParser

from dmarc_report.errors import (
    ContainerError,
    MalformedFieldError,
    NotFoundError,
    ParseError,
    ReportExtractionError,
)
from dmarc_report.evaluation import aggregate_error
from dmarc_report.model.dmarc_aggregate_report import DateRangeType, Feedback

logger = structlog.get_logger()

Source = Union[bytes, BinaryIO]

GZIP_MAGIC = b"\x1f\x8b"

# Elements bound through the epoch timestamp converter, by model class and
# field name.
TIMESTAMP_FIELDS: Mapping[type, Mapping[str, str]] = {
    DateRangeType: {
        "begin": "feedback/report_metadata/date_range/begin",
        "end": "feedback/report_metadata/date_range/end",
    },
}

_context = XmlContext()


class FeedbackParser(XmlParser):
    """XmlParser that only accepts ``<feedback>`` as the document element."""

    def start(self, clazz, queue, objects, qname, attrs, ns_map):
        if not queue:
            _, _, name = qname.rpartition("}")
            if name != Feedback.Meta.name:
                raise ParserError(
                    f"expected element <{Feedback.Meta.name}> but have <{name}>"
                )
        super().start(clazz, queue, objects, qname, attrs, ns_map)


def create_model(clazz: type, params: Dict[str, Any]) -> Any:
    for name, path in TIMESTAMP_FIELDS.get(clazz, {}).items():
        value = params.get(name)
        if value is not None and not isinstance(value, datetime):
            raise MalformedFieldError(path, value)
    return clazz(**params)


def decode(source: Source) -> Feedback:
    """Decode an aggregate report from raw XML."""
    parser = FeedbackParser(
        context=_context,
        config=ParserConfig(
            fail_on_unknown_properties=False,
            fail_on_converter_warnings=True,
            class_factory=create_model,
        ),
    )
    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            return parser.from_bytes(bytes(source), Feedback)
        return parser.parse(source, Feedback)
    except (ParserError, ConverterError, ConverterWarning, SyntaxError) as err:
        raise ParseError(str(err)) from err


def decode_gzip(source: Source) -> Feedback:
    """Decode a gzip compressed aggregate report."""
    stream = _as_stream(source)
    try:
        if not hasattr(stream, "peek") and not stream.seekable():
            stream = io.BufferedReader(stream)
        if _peek(stream, len(GZIP_MAGIC)) != GZIP_MAGIC:
            raise ContainerError("gzip", "not a gzipped file")
        with gzip.GzipFile(fileobj=stream, mode="rb") as gzip_file:
            return decode(gzip_file)
    except (OSError, EOFError, zlib.error) as err:
        raise ContainerError("gzip", str(err)) from err


def decode_zip(source: Source) -> Feedback:
    """Decode the first ``.xml`` member of a zip archive.

    The archive needs random access, so ``source`` must be bytes or a seekable
    file. Members are scanned in archive order and the first regular file with
    the ``.xml`` extension wins; any further ``.xml`` members are ignored.
    """
    try:
        zip_file = ZipFile(_as_stream(source), "r")
    except (BadZipFile, OSError, ValueError) as err:
        raise ContainerError("zip", str(err)) from err

    with zip_file:
        candidates = [
            info
            for info in zip_file.infolist()
            if not info.is_dir() and info.filename.endswith(".xml")
        ]
        if not candidates:
            raise NotFoundError("no suitable .xml file found in zip")
        member = candidates[0]
        if len(candidates) > 1:
            logger.debug(
                "ignoring_zip_members",
                used=member.filename,
                ignored=[info.filename for info in candidates[1:]],
            )
        try:
            with zip_file.open(member, "r") as f:
                return decode(f)
        except (
            BadZipFile,
            OSError,
            EOFError,
            RuntimeError,
            NotImplementedError,
            zlib.error,
        ) as err:
            raise ContainerError(
                "zip", f"could not open zipped file {member.filename}: {err}"
            ) from err


def _decode_buffered_zip(source: Source) -> Feedback:
    if not isinstance(source, (bytes, bytearray, memoryview)):
        # zip needs random access: the whole input is held in memory
        source = source.read()
    return decode_zip(source)


file_extension_handlers: Mapping[str, Callable[[Source], Feedback]] = {
    ".gz": decode_gzip,
    ".zip": _decode_buffered_zip,
}


def decode_file(filename: str, source: Source) -> Feedback:
    """Decode a report, picking the container by the extension of ``filename``.

    The content itself is not inspected. Anything not ending in ``.gz`` or
    ``.zip`` is decoded as raw XML, so a mislabelled file fails with a parse
    error.
    """
    _, dot, suffix = os.path.basename(filename).rpartition(".")
    file_extension = dot + suffix if dot else ""
    handler = file_extension_handlers.get(file_extension, decode)
    logger.debug("decoding_file", filename=filename, handler=handler.__name__)
    return handler(source)


def validate(source: Source) -> None:
    _raise_policy_failure(decode(source))


def validate_gzip(source: Source) -> None:
    _raise_policy_failure(decode_gzip(source))


def validate_zip(source: Source) -> None:
    _raise_policy_failure(decode_zip(source))


def validate_file(filename: str, source: Source) -> None:
    _raise_policy_failure(decode_file(filename, source))


def _raise_policy_failure(feedback: Feedback):
    error = aggregate_error(feedback)
    if error is not None:
        raise error


def handle_octet_stream(filename: Optional[str], content: bytes) -> Feedback:
    return decode_file(filename or "", content)


def handle_text_xml(_filename: Optional[str], content: Union[str, bytes]) -> Feedback:
    if isinstance(content, str):
        content = content.encode("utf-8")
    return decode(content)


def handle_application_gzip(_filename: Optional[str], content: bytes) -> Feedback:
    return decode_gzip(content)


def handle_application_zip(_filename: Optional[str], content: bytes) -> Feedback:
    return decode_zip(content)


content_type_handlers: Mapping[str, Callable[..., Feedback]] = {
    "application/octet-stream": handle_octet_stream,
    "application/gzip": handle_application_gzip,
    "application/x-gzip": handle_application_gzip,
    "application/zip": handle_application_zip,
    "application/x-zip-compressed": handle_application_zip,
    "application/xml": handle_text_xml,
    "text/xml": handle_text_xml,
}


def decode_email(msg: EmailMessage) -> Generator[Feedback, None, None]:
    """Yield the aggregate reports attached to an email."""
    has_found_a_report = False
    for part in msg.walk():
        if part.get_content_type() in content_type_handlers:
            handler = content_type_handlers[part.get_content_type()]
            content = raw_data_manager.get_content(part)
            has_found_a_report = True
            yield handler(part.get_filename(), content)
    if not has_found_a_report:
        raise ReportExtractionError(msg)


def _as_stream(source: Source) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(source)
    return source


def _peek(stream: BinaryIO, size: int) -> bytes:
    if hasattr(stream, "peek"):
        return stream.peek(size)[:size]
    position = stream.tell()
    head = stream.read(size)
    stream.seek(position)
    return head
