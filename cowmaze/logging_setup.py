# -*- coding: utf-8 -*-
"""
cowmaze/logging_setup.py
Basic logging setup: call setup_logging(level="INFO") at the CLI entry point.
Logs go to stderr; stdout carries the search transcript.
"""

import logging, sys

def setup_logging(level: str = "INFO"):
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr
    )

def get_logger(name: str = "cowmaze") -> logging.Logger:
    return logging.getLogger(name)
