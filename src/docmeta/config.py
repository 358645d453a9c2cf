"""Environment-driven settings."""

import os


class Config:
    LOG_LEVEL = os.environ.get("DOCMETA_LOG_LEVEL", "WARNING")
    # Replaces the version string substituted for VERSION in test annotations
    VERSION = os.environ.get("DOCMETA_VERSION")
