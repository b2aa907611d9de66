# namedvec/config/__init__.py
#
# app_config is imported lazily by callers; it depends on utils.logger,
# which itself imports log_config from this package.
from .log_config import LogConfig
from .vector_config import BroadcastLayout, VectorConfig

__all__ = ["LogConfig", "VectorConfig", "BroadcastLayout"]
