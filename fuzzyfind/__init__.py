"""Fuzzy and exact matching with scoring, ANSI color extraction, chunked item storage, result merging and query history."""

__version__ = "0.27.0"