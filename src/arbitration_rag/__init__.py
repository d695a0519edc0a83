"""Retrieval-augmented question answering over arbitration case documents."""

__version__ = "0.1.0"
