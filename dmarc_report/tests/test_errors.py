from dmarc_report.errors import (
    CheckFailure,
    ContainerError,
    DecodeError,
    MalformedFieldError,
    NotFoundError,
    ParseError,
    PolicyFailure,
    ReportError,
)


def test_policy_failure_without_errors_is_none():
    assert PolicyFailure("title").error_or_none() is None


def test_policy_failure_with_errors_is_itself():
    failure = PolicyFailure("title", [CheckFailure("check", "reason")])
    assert failure.error_or_none() is failure


def test_policy_failure_indents_nested_failures():
    failure = PolicyFailure(
        "outer:",
        [
            PolicyFailure(
                "middle:",
                [PolicyFailure("inner:", [CheckFailure("a", "deepest")])],
            ),
            ValueError("plain"),
        ],
    )
    assert str(failure) == (
        "outer:\n"
        "\t* middle:\n"
        "\t\t* inner:\n"
        "\t\t\t* deepest\n"
        "\t* plain\n"
    )


def test_policy_failure_without_title():
    assert str(PolicyFailure("", [CheckFailure("a", "reason")])) == "error\n\t* reason\n"


def test_decode_errors_are_distinguishable_from_policy_failures():
    decode_errors = [
        ContainerError("gzip", "Not a gzipped file"),
        NotFoundError("no suitable .xml file found in zip"),
        ParseError("mismatched tag"),
        MalformedFieldError("feedback/report_metadata/date_range/end", "x"),
    ]
    for err in decode_errors:
        assert isinstance(err, DecodeError)
        assert isinstance(err, ReportError)
    assert not isinstance(PolicyFailure("title"), DecodeError)
    assert isinstance(PolicyFailure("title"), ReportError)


def test_error_messages():
    assert str(ContainerError("zip", "File is not a zip file")) == (
        "could not open zip container: File is not a zip file"
    )
    assert str(ParseError("invalid integer 'x'", "feedback/record/row/count")) == (
        "could not parse report at feedback/record/row/count: invalid integer 'x'"
    )
    assert str(MalformedFieldError("feedback/a", "x")) == "malformed value 'x' for feedback/a"
