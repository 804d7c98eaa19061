"""Credential Expiry Monitor - Entra ID certificate and secret expiry alerts."""

__version__ = "1.0.0"
