"""Path exclusion matching for request logging."""

from typing import Iterable


def is_excluded(path: str, exclude_prefixes: Iterable[str]) -> bool:
    """
    Check whether a request path falls under an excluded prefix.

    Matching is a literal, case-sensitive ``startswith``; no trailing-slash
    or case normalisation is applied, so ``"/health"`` also matches
    ``"/healthz"`` but not ``"/Health"``.

    Args:
        path: Request path
        exclude_prefixes: Ordered prefixes; the first match short-circuits

    Returns:
        True if any prefix matches, False otherwise (including no prefixes)
    """
    for prefix in exclude_prefixes:
        if path.startswith(prefix):
            return True
    return False
