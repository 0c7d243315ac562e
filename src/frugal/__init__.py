"""frugal: declarative controller routing for ASGI.

Describe endpoints as decorated methods on plain classes; frugal turns
them into handlers with uniform JSON responses, status codes and error
mapping.

Basic usage::

    from frugal import App, HTTPException, controller, get, post, status

    @controller("/api")
    class DefaultController:
        @get("/:id")
        def show(self, request):
            return {"id": request.path_params["id"]}

        @post("/")
        @status(202)
        async def create(self, request):
            return await request.json()

        @get("/secret")
        def secret(self, request):
            raise HTTPException("Forbidden", 403)

    app = App().register(DefaultController)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Dispatcher",
    "FrugalError",
    "HTTPException",
    "HttpMethod",
    "NotFound",
    "Request",
    "Response",
    "ResponseWriter",
    "RouteRegistry",
    "controller",
    "delete",
    "get",
    "patch",
    "post",
    "put",
    "registry",
    "route",
    "status",
]

_LAZY: dict[str, str] = {
    "App": "frugal.app",
    "AppConfig": "frugal.config",
    "Dispatcher": "frugal.dispatch",
    "ConfigurationError": "frugal.errors",
    "FrugalError": "frugal.errors",
    "HTTPException": "frugal.errors",
    "NotFound": "frugal.errors",
    "Request": "frugal.http.request",
    "Response": "frugal.http.response",
    "ResponseWriter": "frugal.http.writer",
    "HttpMethod": "frugal.routing.table",
    "RouteRegistry": "frugal.routing.registry",
    "registry": "frugal.routing.registry",
    "controller": "frugal.routing.decorators",
    "route": "frugal.routing.decorators",
    "get": "frugal.routing.decorators",
    "put": "frugal.routing.decorators",
    "post": "frugal.routing.decorators",
    "patch": "frugal.routing.decorators",
    "delete": "frugal.routing.decorators",
    "status": "frugal.routing.decorators",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import frugal`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module 'frugal' has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module_name), name)
