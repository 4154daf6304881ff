"""Pure domain services."""

from .entity_flattener import flatten_entities
from .time_buckets import Bucket, infer_bucket, round_timestamp

__all__ = ["Bucket", "flatten_entities", "infer_bucket", "round_timestamp"]
