"""
Pagination and value clamping helpers.
"""

from .pagination import Pagination, compute_page_info
from .value import clamp

__all__ = ["Pagination", "compute_page_info", "clamp"]
