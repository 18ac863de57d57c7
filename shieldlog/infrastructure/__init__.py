"""Infrastructure: structlog request logger and Starlette host adapter."""
