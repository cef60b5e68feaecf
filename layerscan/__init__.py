"""Layer archive extraction, vulnerability change tracking, JSON logging and thread stopping."""

__version__ = "0.1.0"