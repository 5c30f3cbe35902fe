"""Integration tests for confluence-pages.

These tests wire the real components together (HTTP client, converters,
sinks and local storage) and only replace the network session, so they run
without Confluence credentials.

Run them on their own with:
    pytest tests/integration -m integration
"""
