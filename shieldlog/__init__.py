"""shieldlog: request logging and security headers for HTTP pipelines."""

__version__ = "0.1.0"
