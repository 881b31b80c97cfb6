"""
RightScale API access for rs-mule.

- RightApi / ApiResource: The protocol the dispatcher depends on
- RightApiClient: requests-based implementation
"""

from rsmule.right_api.protocol import ApiResource, RightApi
from rsmule.right_api.resource import Resource
from rsmule.right_api.client import RightApiClient

__all__ = [
    "ApiResource",
    "RightApi",
    "Resource",
    "RightApiClient",
]
