#!/usr/bin/env python3
"""Logging setup for dhlease: diagnostics on stderr, optionally mirrored to syslog."""

import logging
import logging.handlers
import sys


def setup_logging(script_name, log_level="WARNING", use_syslog=False):
    """Set up console logging on stderr, plus syslog when requested."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_formatter = logging.Formatter('[%(filename)s:%(lineno)d] %(levelname)s: %(message)s')
    syslog_formatter = logging.Formatter(f'{script_name}[%(process)d]: %(levelname)s: %(message)s')

    level = getattr(logging, str(log_level).upper(), logging.WARNING)
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if use_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address='/dev/log',
                facility=logging.handlers.SysLogHandler.LOG_USER
            )
            syslog_handler.setFormatter(syslog_formatter)
            syslog_handler.setLevel(level)
            root_logger.addHandler(syslog_handler)
        except OSError as e:
            print(f"Warning: Could not connect to syslog: {e}", file=sys.stderr)

    return root_logger
