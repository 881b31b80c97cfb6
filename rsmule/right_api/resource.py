"""
Resource - Wrapper around an API 1.5 JSON document.

Every API 1.5 resource carries a "links" array. The "self" link is the
resource's href, other rels ("parent", "deployment", "inputs",
"next_instance", ...) point at related resources.
"""

from typing import TYPE_CHECKING, Any

from rsmule.errors import ResourceLinkError

if TYPE_CHECKING:
    from rsmule.right_api.client import RightApiClient


class Resource:
    """A resource document bound to the client that fetched it."""

    def __init__(self, client: "RightApiClient", data: dict[str, Any], href: str | None = None):
        self.client = client
        self.data = data or {}
        self._href = href

    @property
    def links(self) -> list[dict[str, str]]:
        return self.data.get("links") or []

    @property
    def href(self) -> str:
        for link in self.links:
            if link.get("rel") == "self":
                return link["href"]
        if self._href:
            return self._href
        raise ResourceLinkError("<unknown>", "self")

    @property
    def revision(self) -> int | None:
        return self.data.get("revision")

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    def link_href(self, rel: str) -> str:
        for link in self.links:
            if link.get("rel") == rel:
                return link["href"]
        raise ResourceLinkError(self._href or self.data.get("name", "<unknown>"), rel)

    def follow(self, rel: str) -> "Resource":
        return self.client.resource(self.link_href(rel))

    def run_executable(self, params: dict[str, Any]) -> None:
        self.client.post(f"{self.href}/run_executable", params)

    def update_inputs(self, inputs: dict[str, str]) -> None:
        self.client.put(f"{self.link_href('inputs')}/multi_update", {"inputs": inputs})

    def __repr__(self) -> str:
        return f"Resource(href={self._href or self.data.get('name')})"
