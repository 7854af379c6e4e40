"""Oh Man! - AI-powered man page assistant."""

__version__ = "0.4.8"
