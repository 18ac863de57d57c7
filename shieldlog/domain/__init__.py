"""Domain layer: value objects, errors and pure request/response helpers."""
