"""Ding Dong: a high-throughput HTTP responder for load testing."""

__version__ = "0.1.0"
