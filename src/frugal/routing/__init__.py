"""Routing: route tables, the controller registry, and path matching.

Controllers declare their routes into a ``RouteRegistry`` at import time;
the dispatcher reads them once and installs handlers on a ``Router``.
"""
