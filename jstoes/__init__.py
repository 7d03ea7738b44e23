"""jstoes: rewrite legacy global-namespace JavaScript into ES modules."""

__version__ = "0.1.0"
