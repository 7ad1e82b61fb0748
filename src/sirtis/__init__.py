"""SIRTIS call-centre service."""

__version__ = "0.1.0"
