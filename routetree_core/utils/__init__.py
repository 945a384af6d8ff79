"""Utils module - Configuration and path helpers."""

from routetree_core.utils.config import (
    RouterConfig,
    load_config,
)
from routetree_core.utils.helpers import (
    split_path,
    parse_pattern,
    is_param_token,
    param_token_name,
)

__all__ = [
    "RouterConfig",
    "load_config",
    "split_path",
    "parse_pattern",
    "is_param_token",
    "param_token_name",
]
