"""Fake Confluence credentials used across unit tests.

Nothing here reaches a real Confluence instance; every test mocks the
transport.
"""

SERVER_URL = "https://example.atlassian.net"
USERNAME = "user@example.com"
API_TOKEN = "token123"
