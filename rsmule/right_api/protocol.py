"""
RightScale API interface used by the dispatcher.

This module defines the protocol that any API client must implement,
allowing RunExecutable to be decoupled from the HTTP layer.

Implementations:
- RightApiClient: Real implementation over requests (rsmule.right_api.client)
- MagicMock-based fakes in the test suite
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ApiResource(Protocol):
    """
    Protocol for a single API 1.5 resource (instance, RightScript, ...).

    Links are the API's "links" array of {"rel": ..., "href": ...} dicts.
    """

    @property
    def href(self) -> str:
        """The resource's own href (the "self" link)."""
        ...

    @property
    def links(self) -> list[dict[str, str]]:
        """All links of the resource."""
        ...

    @property
    def revision(self) -> int | None:
        """RightScript revision. None for resources without one."""
        ...

    @property
    def name(self) -> str | None:
        """Resource name. None for resources without one."""
        ...

    def link_href(self, rel: str) -> str:
        """
        Get the href of a link by rel.

        Raises:
            ResourceLinkError: If the resource has no such link
        """
        ...

    def follow(self, rel: str) -> "ApiResource":
        """Fetch the resource behind a link."""
        ...

    def run_executable(self, params: dict[str, Any]) -> None:
        """
        Run a RightScript or recipe on this instance.

        Args:
            params: Exactly one of right_script_href or recipe_name,
                and optionally inputs
        """
        ...

    def update_inputs(self, inputs: dict[str, str]) -> None:
        """Multi-update this resource's inputs (Inputs 2.0 semantics)."""
        ...


@runtime_checkable
class RightApi(Protocol):
    """
    Protocol for the RightScale API calls rs-mule needs.

    Authentication, transport and error mapping are the implementation's
    concern; the dispatcher only navigates resources.
    """

    def by_tag(
        self,
        resource_type: str,
        tags: list[str],
        match_all: bool = True,
    ) -> list[ApiResource]:
        """
        Find resources by tag.

        Args:
            resource_type: Resource type to search, e.g. "instances"
            tags: Tags to match
            match_all: True to require every tag, False to require any

        Returns:
            Tag resources whose first link points at the matched resource
        """
        ...

    def resource(self, href: str) -> ApiResource:
        """Fetch a resource by href."""
        ...

    def right_scripts(self, filters: list[str] | None = None) -> list[ApiResource]:
        """
        Index RightScripts.

        Args:
            filters: API filter expressions, e.g. ["name==my script"]
        """
        ...
