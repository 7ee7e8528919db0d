import logging

from hiera_aws_sm.infrastructure.observability.logging_setup import configure_logging


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")

        added = [h for h in root.handlers if h not in before]
        assert len(added) <= 1
        assert logging.getLogger("hiera_aws_sm").level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if h not in before]:
            root.removeHandler(handler)
        logging.getLogger("hiera_aws_sm").setLevel(logging.NOTSET)
