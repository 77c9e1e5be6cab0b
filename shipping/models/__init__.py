from .area import Area
from .county import County

__all__ = [
    "County",
    "Area",
]
