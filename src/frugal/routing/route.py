"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from frugal._internal.types import SurfaceHandler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``      (is_param=False)
    Param:   ``/:id``        (is_param=True, param_name="id")
    Braced:  ``/{id}``       (is_param=True, param_name="id")
    Typed:   ``/{id:int}``   (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Route:
    """A handler installed for one method + path pattern."""

    method: str
    path: str
    handler: SurfaceHandler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
