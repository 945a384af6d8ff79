"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

PARAM_OPEN = "{"
PARAM_CLOSE = "}"

Pattern = Union[str, Sequence[str]]


def split_path(path: str, case_sensitive: bool = False) -> List[str]:
    """Split a request path into non-empty segments.

    Leading, trailing and repeated slashes collapse away, so
    ``"//Users/42/"`` becomes ``["users", "42"]`` when case-insensitive.
    """
    if not path:
        return []

    if not case_sensitive:
        path = path.lower()

    return [segment for segment in path.split("/") if segment]


def is_param_token(token: str) -> bool:
    """Check if a pattern token is a parameter (``{name}``)."""
    return (
        len(token) >= 2
        and token.startswith(PARAM_OPEN)
        and token.endswith(PARAM_CLOSE)
    )


def param_token_name(token: str) -> Optional[str]:
    """Get the parameter name of a token, or None for literals."""
    if not is_param_token(token):
        return None
    return token[1:-1].strip()


def parse_pattern(pattern: Pattern) -> List[str]:
    """Turn a route pattern into its list of tokens.

    Accepts ``"/users/{id}/show"`` or an already tokenized sequence.
    Empty tokens are dropped either way.
    """
    if isinstance(pattern, str):
        tokens = pattern.split("/")
    else:
        tokens = list(pattern)

    result = []
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError(
                f"Pattern tokens must be strings. Received: {type(token).__name__}"
            )
        if token:
            result.append(token)
    return result


def join_pattern(tokens: Sequence[str]) -> str:
    """Render tokens back to a ``/``-separated pattern."""
    return "/" + "/".join(tokens)


__all__ = [
    "Pattern",
    "split_path",
    "is_param_token",
    "param_token_name",
    "parse_pattern",
    "join_pattern",
]
