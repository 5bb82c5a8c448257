"""Summarizer adapter."""

from .client import HttpSummarizer, MockSummarizer

__all__ = ["HttpSummarizer", "MockSummarizer"]
