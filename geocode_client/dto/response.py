"""Read-only accessors over a raw Geocoding API response.

The service returns deeply nested JSON where almost every level is optional.
:class:`GeocodeResponse` wraps the decoded document and answers questions
about its first result without ever raising on a missing key; each accessor
returns ``None`` (or an empty list where "nothing" is meaningful) instead.

Address component lookups scan ``address_components`` in document order and
the first component tagged with the requested type wins. The service orders
components from most to least specific, so no further ranking is applied.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar, overload

from geocode_client.dto.address import Coordinates, StructuredAddress

T = TypeVar("T")

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
SUCCESS_STATUSES = frozenset({STATUS_OK, STATUS_ZERO_RESULTS})


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)  # noqa: UP038


class _ResultAccessors:
    """Accessors shared by a single result and by the response's first result."""

    def _result_data(self) -> dict[str, Any]:
        raise NotImplementedError

    def _geometry(self) -> dict[str, Any]:
        return _as_dict(self._result_data().get("geometry"))

    def get_formatted_address(self) -> str | None:
        return _as_str(self._result_data().get("formatted_address"))

    def get_coordinates(self) -> Coordinates | None:
        """Return ``geometry.location`` or ``None`` when it is missing or not numeric."""

        location = self._geometry().get("location")
        if not isinstance(location, dict):
            return None
        lat = location.get("lat")
        lng = location.get("lng")
        if not (_is_number(lat) and _is_number(lng)):
            return None
        return Coordinates(latitude=float(lat), longitude=float(lng))

    def get_latitude(self) -> float | None:
        coordinates = self.get_coordinates()
        return coordinates.latitude if coordinates else None

    def get_longitude(self) -> float | None:
        coordinates = self.get_coordinates()
        return coordinates.longitude if coordinates else None

    def get_place_id(self) -> str | None:
        return _as_str(self._result_data().get("place_id"))

    def get_plus_code(self) -> dict[str, Any] | None:
        plus_code = self._result_data().get("plus_code")
        return copy.deepcopy(plus_code) if isinstance(plus_code, dict) else None

    def get_plus_code_compound(self) -> str | None:
        return _as_str(_as_dict(self._result_data().get("plus_code")).get("compound_code"))

    def get_plus_code_global(self) -> str | None:
        return _as_str(_as_dict(self._result_data().get("plus_code")).get("global_code"))

    def get_location_type(self) -> str | None:
        """ROOFTOP, RANGE_INTERPOLATED, GEOMETRIC_CENTER or APPROXIMATE."""

        return _as_str(self._geometry().get("location_type"))

    def get_viewport(self) -> dict[str, Any] | None:
        viewport = self._geometry().get("viewport")
        return copy.deepcopy(viewport) if isinstance(viewport, dict) else None

    def get_types(self) -> list[str]:
        return list(_as_list(self._result_data().get("types")))

    def get_partial_match(self) -> bool | None:
        value = self._result_data().get("partial_match")
        return value if isinstance(value, bool) else None

    def get_address_components(self) -> list[dict[str, Any]]:
        return copy.deepcopy(_as_list(self._result_data().get("address_components")))

    def _find_component(self, component_type: str) -> dict[str, Any] | None:
        for component in _as_list(self._result_data().get("address_components")):
            if not isinstance(component, dict):
                continue
            if component_type in _as_list(component.get("types")):
                return component
        return None

    def get_address_component(self, component_type: str) -> str | None:
        component = self._find_component(component_type)
        return _as_str(component.get("long_name")) if component is not None else None

    def get_address_component_short(self, component_type: str) -> str | None:
        component = self._find_component(component_type)
        return _as_str(component.get("short_name")) if component is not None else None

    def get_street_number(self) -> str | None:
        return self.get_address_component("street_number")

    def get_street_name(self) -> str | None:
        return self.get_address_component("route")

    def get_city(self) -> str | None:
        return self.get_address_component("locality")

    def get_state(self) -> str | None:
        return self.get_address_component("administrative_area_level_1")

    def get_state_short(self) -> str | None:
        return self.get_address_component_short("administrative_area_level_1")

    def get_county(self) -> str | None:
        return self.get_address_component("administrative_area_level_2")

    def get_postal_code(self) -> str | None:
        return self.get_address_component("postal_code")

    def get_country(self) -> str | None:
        return self.get_address_component("country")

    def get_country_short(self) -> str | None:
        """ISO 3166-1 alpha-2 country code."""

        return self.get_address_component_short("country")

    def get_structured_address(self) -> StructuredAddress:
        return StructuredAddress(
            street_number=self.get_street_number(),
            street_name=self.get_street_name(),
            city=self.get_city(),
            county=self.get_county(),
            state=self.get_state(),
            state_short=self.get_state_short(),
            postal_code=self.get_postal_code(),
            country=self.get_country(),
            country_short=self.get_country_short(),
            formatted_address=self.get_formatted_address(),
        )


class ResultView(_ResultAccessors):
    """Accessors bound to one entry of ``results``."""

    def __init__(self, result: Mapping[str, Any] | None):
        self._result = result if isinstance(result, dict) else {}

    def _result_data(self) -> dict[str, Any]:
        return self._result

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._result)

    def __repr__(self) -> str:
        return f"ResultView(place_id={self.get_place_id()!r})"


class ResultsView(Generic[T]):
    """Restartable, lazy sequence over the results of one response.

    Every ``iter()`` walks the results again in document order; ``transform``
    runs on demand for each entry.
    """

    def __init__(
        self,
        results: list[Any],
        transform: Callable[[ResultView], T] | None = None,
    ):
        self._results = results
        self._transform = transform

    def __iter__(self) -> Iterator[T]:
        for result in self._results:
            view = ResultView(result)
            yield self._transform(view) if self._transform else view  # type: ignore[misc]

    def __len__(self) -> int:
        return len(self._results)


class GeocodeResponse(_ResultAccessors):
    """Normalized view of a Geocoding API response.

    Result-level accessors (``get_city``, ``get_coordinates`` ...) read the
    first result. ``ZERO_RESULTS`` responses are valid: every such accessor
    then returns ``None`` and ``get_types`` returns ``[]``.
    """

    def __init__(self, data: Mapping[str, Any]):
        self._data = dict(data) if isinstance(data, Mapping) else {}

    def _results(self) -> list[Any]:
        return _as_list(self._data.get("results"))

    def _result_data(self) -> dict[str, Any]:
        results = self._results()
        return _as_dict(results[0]) if results else {}

    def get_all(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def get_status(self) -> str:
        """Return the service status verbatim, ``""`` when missing."""

        status = self._data.get("status")
        return status if isinstance(status, str) else ""

    def get_error_message(self) -> str | None:
        return _as_str(self._data.get("error_message"))

    def is_success(self) -> bool:
        return self.get_status() in SUCCESS_STATUSES

    def get_first_result(self) -> dict[str, Any] | None:
        results = self._results()
        return copy.deepcopy(results[0]) if results else None

    def get_results(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._results())

    @property
    def result_count(self) -> int:
        return len(self._results())

    def is_empty(self) -> bool:
        return not self._results()

    @overload
    def iter_results(self) -> ResultsView[ResultView]: ...

    @overload
    def iter_results(self, transform: Callable[[ResultView], T]) -> ResultsView[T]: ...

    def iter_results(self, transform=None):
        return ResultsView(self._results(), transform)

    def __repr__(self) -> str:
        return f"GeocodeResponse(status={self.get_status()!r}, results={self.result_count})"


__all__ = [
    "GeocodeResponse",
    "ResultView",
    "ResultsView",
    "STATUS_OK",
    "STATUS_ZERO_RESULTS",
    "SUCCESS_STATUSES",
]
