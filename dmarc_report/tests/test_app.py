import io
import json
from email.generator import BytesGenerator

import pytest

from dmarc_report.app import (
    EXIT_DECODE_ERROR,
    EXIT_OK,
    EXIT_POLICY_FAILURE,
    App,
    main,
)
from dmarc_report.model.tests.sample_data import (
    SAMPLE_REPORT_ERROR,
    create_feedback_xml,
    create_record_xml,
    create_sample_xml,
)
from dmarc_report.tests.sample_reports import (
    create_email_with_attachment,
    create_gzip_bytes,
    create_minimal_email,
    create_zip_bytes,
    create_zip_report,
)


@pytest.fixture(name="report_dir")
def fixture_report_dir(tmp_path):
    (tmp_path / "failing.xml").write_text(create_sample_xml(), encoding="utf-8")
    (tmp_path / "failing.xml.gz").write_bytes(create_gzip_bytes())
    (tmp_path / "failing.zip").write_bytes(create_zip_bytes())
    (tmp_path / "passing.xml").write_text(
        create_feedback_xml(create_record_xml()), encoding="utf-8"
    )
    (tmp_path / "broken.xml.gz").write_bytes(b"not gzip")
    return tmp_path


def write_email(path, msg):
    with open(path, "wb") as f:
        BytesGenerator(f).flatten(msg)


def test_passing_report_exits_ok(report_dir):
    output = io.StringIO()
    assert App(output=output).run([report_dir / "passing.xml"]) == EXIT_OK
    assert output.getvalue() == ""


@pytest.mark.parametrize("filename", ["failing.xml", "failing.xml.gz", "failing.zip"])
def test_failing_report_prints_failures(report_dir, filename):
    output = io.StringIO()
    path = report_dir / filename
    assert App(output=output).run([path]) == EXIT_POLICY_FAILURE
    assert output.getvalue() == f"{path}: {SAMPLE_REPORT_ERROR}"


def test_decode_errors_take_precedence(report_dir):
    output = io.StringIO()
    paths = [report_dir / "failing.xml", report_dir / "broken.xml.gz"]
    assert App(output=output).run(paths) == EXIT_DECODE_ERROR
    assert output.getvalue() == f"{paths[0]}: {SAMPLE_REPORT_ERROR}"


def test_missing_file_is_a_decode_error(report_dir):
    assert App(output=io.StringIO()).run([report_dir / "missing.xml"]) == (
        EXIT_DECODE_ERROR
    )


def test_checks_reports_attached_to_emails(report_dir):
    write_email(
        report_dir / "report.eml", create_email_with_attachment(create_zip_report())
    )
    output = io.StringIO()
    assert App(output=output).run([report_dir / "report.eml"]) == EXIT_POLICY_FAILURE
    assert SAMPLE_REPORT_ERROR in output.getvalue()


def test_email_without_report_is_a_decode_error(report_dir):
    write_email(report_dir / "empty.eml", create_minimal_email(content="Hello"))
    assert App(output=io.StringIO()).run([report_dir / "empty.eml"]) == (
        EXIT_DECODE_ERROR
    )


def test_main_reads_configuration(report_dir, capsys):
    configuration = report_dir / "configuration.json"
    configuration.write_text(
        json.dumps(
            {
                "logging": {
                    "handlers": {
                        "default": {
                            "class": "logging.StreamHandler",
                            "formatter": "json",
                        }
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    exit_code = main(
        ["--configuration", str(configuration), str(report_dir / "passing.xml")]
    )

    assert exit_code == EXIT_OK
    (line,) = capsys.readouterr().err.splitlines()
    doc = json.loads(line)
    assert doc["event"] == "report_checked"
    assert doc["report_id"] == ""
    assert doc["failed_records"] == 0
