"""Route table — every generated route, keyed by source path and query."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from wilson._errors import RouteNotFound
from wilson.routing.models import Query, RouteEntry

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from wilson._types import QueryString, RoutePath
    from wilson.routing.models import PageProps, Route, RouteKey


class RouteTable:
    """Ordered ``(source_path, query_string) -> Route`` mapping.

    Regeneration of a source is remove-then-add, so its routes move to the
    end of the enumeration order. Consumers must not rely on that order.

    """

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: dict[RouteKey, Route] = {}
        self.add_all(routes)

    def add(self, route: Route) -> None:
        self._routes[route.key] = route

    def add_all(self, routes: Iterable[Route]) -> int:
        count = 0
        for route in routes:
            self.add(route)
            count += 1
        return count

    def remove_source(self, source_path: Path) -> int:
        """Delete every route generated from ``source_path``. Returns how many."""
        keys = [key for key in self._routes if key[0] == source_path]
        for key in keys:
            del self._routes[key]
        return len(keys)

    def routes_for(self, source_path: Path) -> list[Route]:
        return [route for key, route in self._routes.items() if key[0] == source_path]

    def get(
        self,
        source_path: Path | str,
        query: Query | QueryString | dict[str, Any] | None = None,
    ) -> Route | None:
        """The route for ``source_path`` and ``query``; None when there is none.

        A query that does not parse (e.g. a non-numeric ``page``) matches no
        route.
        """
        try:
            query_string = Query.parse(query).to_string()
        except (TypeError, ValueError):
            return None
        return self._routes.get((Path(source_path), query_string))

    def props(
        self,
        source_path: Path | str,
        query: Query | QueryString | dict[str, Any] | None = None,
    ) -> PageProps:
        """Props of one route.

        Raises:
            RouteNotFound: If no route has this source path and query.

        """
        route = self.get(source_path, query)
        if route is None:
            suffix = f" with query {query!r}" if query not in (None, "", {}, Query()) else ""
            msg = f"No route for {source_path}{suffix}"
            raise RouteNotFound(msg)
        return route.props

    def find(self, route_path: RoutePath) -> Route | None:
        """The route served at ``route_path``, if any."""
        for route in self._routes.values():
            if route.route == route_path:
                return route
        return None

    def entries(self) -> list[RouteEntry]:
        """Manifest entries for every route."""
        return [
            RouteEntry(route=r.route, source_path=r.source_path, query=r.query)
            for r in self._routes.values()
        ]

    def snapshot(self) -> dict[RouteKey, tuple[RoutePath, dict[str, Any]]]:
        """Order-independent view of the table's content, for comparisons."""
        return {key: (r.route, r.props.to_dict()) for key, r in self._routes.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(list(self._routes.values()))

    def __len__(self) -> int:
        return len(self._routes)
