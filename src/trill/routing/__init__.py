"""Routing — a composable mux that records routes in registration order.

``Mux`` is the registration surface (middleware, sub-routers, mounts)
and the source of ``walk()``. It compiles into a trie ``Router`` for
request matching.
"""

from trill.routing.mux import Mux, join_path
from trill.routing.route import WalkedRoute

__all__ = ["Mux", "WalkedRoute", "join_path"]
