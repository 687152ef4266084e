"""Blogweave - blog content indexing, pagination, tags and feeds."""

__version__ = "0.1.0"
