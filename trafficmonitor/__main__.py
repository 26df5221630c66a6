"""
Pipeline step entrypoint.

Usage:
    python -m trafficmonitor

Task inputs are read from the INPUT_* environment variables set by the
pipeline host. Exit codes: 0 no violations, 1 out-of-range traffic found,
2 the scan failed.
"""

import sys

from trafficmonitor.config import get_config, setup_logging
from trafficmonitor.task import run


def main() -> int:
    config = get_config()
    setup_logging(config)
    return run(config=config).exit_code


if __name__ == "__main__":
    sys.exit(main())
