"""Docfeed - serialization proxies and anchor recording for content connectors."""

import logging

__version__ = "0.3.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
