"""Stack inventory filtering."""

from .filters import exclude_by_status, select_by_type

__all__ = ["exclude_by_status", "select_by_type"]
