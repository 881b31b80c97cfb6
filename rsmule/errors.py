"""
Error classes for rs-mule.

Two domain errors abort a run before or during dispatch:
- RightScriptNotFound: The named lineage is empty, or the requested revision
  is not part of it
- ConfigError: An option value is not one of the recognized values

Errors raised by the HTTP layer (requests.RequestException) are not wrapped
and propagate to the caller unchanged.
"""


class RsMuleError(Exception):
    """Base exception for rs-mule."""
    pass


class RightScriptNotFound(RsMuleError):
    """
    A RightScript lineage or revision could not be found.

    Raised when:
    - No RightScripts match the requested name
    - The requested revision is not in the lineage
    """
    pass


class ConfigError(RsMuleError, ValueError):
    """
    Invalid configuration.

    Raised for unknown executable types, match strategies or update targets,
    an empty tag set, and unusable authentication parameters. Always raised
    before any request is made to the API.
    """
    pass


class ResourceLinkError(RsMuleError, KeyError):
    """A resource has no link with the requested rel."""

    def __init__(self, href: str, rel: str):
        self.href = href
        self.rel = rel
        super().__init__(f"Resource {href} has no '{rel}' link")

    def __str__(self) -> str:
        return self.args[0]
