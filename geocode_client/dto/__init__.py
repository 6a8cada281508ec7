"""Public DTO exports for geocoding responses."""

from .address import Coordinates, StructuredAddress
from .response import GeocodeResponse, ResultsView, ResultView

__all__ = [
    "Coordinates",
    "GeocodeResponse",
    "ResultView",
    "ResultsView",
    "StructuredAddress",
]
