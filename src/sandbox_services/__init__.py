"""Counter and greeting HTTP services backed by a relational store."""

__version__ = "0.1.0"
