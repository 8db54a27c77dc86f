from datetime import datetime, timezone

from dmarc_report.decoding import decode
from dmarc_report.model.dmarc_aggregate_report import DateRangeType, Feedback

from .sample_data import SAMPLE_DATACLASS, create_sample_xml


def test_deserialization():
    assert decode(create_sample_xml().encode("utf-8")) == SAMPLE_DATACLASS


def test_date_range_is_converted_to_utc_datetimes():
    feedback = decode(create_sample_xml().encode("utf-8"))
    assert feedback.report_metadata.date_range == DateRangeType(
        begin=datetime(2018, 4, 20, 0, 0, 0, tzinfo=timezone.utc),
        end=datetime(2018, 4, 20, 23, 59, 59, tzinfo=timezone.utc),
    )


def test_absent_pct_is_distinct_from_zero():
    absent = decode(create_sample_xml(pct_element="").encode("utf-8"))
    zero = decode(create_sample_xml(pct_element="<pct>0</pct>").encode("utf-8"))
    assert absent.policy_published.pct is None
    assert zero.policy_published.pct == 0


def test_absent_elements_decode_to_empty_values():
    feedback = decode(b"<feedback></feedback>")
    assert feedback == Feedback()
    assert feedback.record == []
    assert feedback.report_metadata.org_name == ""
    assert feedback.report_metadata.date_range.begin is None
