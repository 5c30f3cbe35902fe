"""List, create and update Confluence pages as Markdown.

This package talks to the Confluence Cloud REST API v2 and converts page
bodies between Markdown and Confluence's storage format.
"""

__version__ = "0.1.0"
