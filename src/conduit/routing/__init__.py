"""Routing — compiled identifier table with O(path-depth) matching.

Routes are registered during startup and compiled into an immutable
lookup structure before the provider serves traffic.
"""

from conduit.routing.route import Cardinality, RouteEntry, RouteMatch
from conduit.routing.router import Router

__all__ = ["Cardinality", "RouteEntry", "RouteMatch", "Router"]
