from dmarc_report.app import run

run()
