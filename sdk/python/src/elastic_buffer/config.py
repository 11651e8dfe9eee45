"""
Configuration for elastic buffers.

Defaults suit general use. ``config_from_env`` lets a deployment cap buffer
sizes or total memory without code changes.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .allocator import Allocator, BoundedAllocator, default_allocator
from .eb_types import SIZE_MAX
from .resize_policy import DEFAULT_POLICY, ResizePolicy

MAX_SIZE_ENV = "ELASTIC_BUFFER_MAX_SIZE"
MEMORY_LIMIT_ENV = "ELASTIC_BUFFER_MEMORY_LIMIT"


@dataclass
class ElasticBufferConfig:
    """Elastic buffer configuration."""
    max_size: int = SIZE_MAX  # Largest logical size in bytes
    policy: ResizePolicy = DEFAULT_POLICY
    allocator: Allocator = field(default_factory=default_allocator)

    def __post_init__(self):
        if self.max_size < 0:
            raise ValueError(f"Invalid max size: {self.max_size}")


def _parse_size(name: str, value: str) -> int:
    try:
        size = int(value, 0)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if size < 0:
        raise ValueError(f"{name} must not be negative, got {size}")
    return size


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> ElasticBufferConfig:
    """
    Build a configuration from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``

    Returns:
        Configuration honouring ``ELASTIC_BUFFER_MAX_SIZE`` and
        ``ELASTIC_BUFFER_MEMORY_LIMIT`` when they are set
    """
    if environ is None:
        environ = os.environ

    config = ElasticBufferConfig()

    max_size = environ.get(MAX_SIZE_ENV)
    if max_size:
        config.max_size = _parse_size(MAX_SIZE_ENV, max_size)

    limit = environ.get(MEMORY_LIMIT_ENV)
    if limit:
        config.allocator = BoundedAllocator(_parse_size(MEMORY_LIMIT_ENV, limit))

    return config
