"""Entry point for running Helpdesk via `python -m helpdesk`."""

import sys

from helpdesk.core import ConfigurationError, load_settings, setup_logger
from helpdesk.service import HelpdeskService


def main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logger("helpdesk").error("startup_aborted", reason=str(e))
        return 1

    HelpdeskService(settings).launch()
    return 0


if __name__ == "__main__":
    sys.exit(main())
