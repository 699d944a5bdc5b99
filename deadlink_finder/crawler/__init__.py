"""Crawler internals: fetching, link extraction and traversal."""
