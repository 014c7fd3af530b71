"""Caller-facing API: client facade and filter builder."""

from .client import JSONAPIClient
from .filters import Filter, sort_param

__all__ = ["JSONAPIClient", "Filter", "sort_param"]
