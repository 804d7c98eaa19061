"""Domain services - Stateless operations on domain objects."""

from .expiry_classifier import ExpiryClassifier

__all__ = ["ExpiryClassifier"]
