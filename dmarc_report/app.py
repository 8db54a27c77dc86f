import argparse
import email.policy
import json
import sys
from dataclasses import asdict
from email.parser import BytesParser
from pathlib import Path
from typing import Generator, Optional, Sequence, TextIO

import structlog

from dmarc_report.decoding import decode_email, decode_file
from dmarc_report.errors import DecodeError
from dmarc_report.evaluation import aggregate_error
from dmarc_report.logging import configure_logging
from dmarc_report.model.dmarc_aggregate_report import Feedback
from dmarc_report.summary import summarize

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_POLICY_FAILURE = 1
EXIT_DECODE_ERROR = 2


def main(argv: Sequence[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Check DMARC aggregate reports for records that failed "
        "DKIM or SPF alignment, authentication, or were not delivered."
    )
    parser.add_argument(
        "reports",
        nargs="+",
        type=Path,
        help="Report files (.xml, .xml.gz, .zip, or .eml emails with reports attached)",
    )
    parser.add_argument(
        "--configuration",
        type=argparse.FileType("r"),
        default=None,
        help="Configuration file",
    )
    parser.add_argument(
        "--debug",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    configuration = {}
    if args.configuration:
        configuration = json.load(args.configuration)
        args.configuration.close()

    configure_logging(configuration.get("logging", {}), debug=args.debug)

    return App().run(args.reports)


def run():
    sys.exit(main(sys.argv[1:]))


class App:
    def __init__(self, *, output: Optional[TextIO] = None):
        self.output = output if output is not None else sys.stdout

    def run(self, paths: Sequence[Path]) -> int:
        exit_code = EXIT_OK
        for path in paths:
            exit_code = max(exit_code, self.check_report_file(path))
        return exit_code

    def check_report_file(self, path: Path) -> int:
        try:
            reports = list(self._load_reports(path))
        except (DecodeError, OSError) as err:
            logger.error("report_not_decoded", path=str(path), exc_info=err)
            return EXIT_DECODE_ERROR

        exit_code = EXIT_OK
        for report in reports:
            logger.info(
                "report_checked",
                path=str(path),
                org_name=report.report_metadata.org_name,
                report_id=report.report_metadata.report_id,
                **asdict(summarize(report)),
            )
            error = aggregate_error(report)
            if error is not None:
                self.output.write(f"{path}: {error}")
                exit_code = EXIT_POLICY_FAILURE
        return exit_code

    @staticmethod
    def _load_reports(path: Path) -> Generator[Feedback, None, None]:
        with open(path, "rb") as f:
            if path.suffix == ".eml":
                msg = BytesParser(policy=email.policy.default).parse(f)
                yield from decode_email(msg)
            else:
                yield decode_file(path.name, f)
