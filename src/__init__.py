"""md-serve: serve a directory over HTTP, rendering markdown documents to HTML."""

__version__ = "0.1.0"
