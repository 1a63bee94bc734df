"""HTTP surface for suntrigger."""

from .rest import SunRestAPI

__all__ = [
    "SunRestAPI",
]
