from unittest.mock import MagicMock

import pytest


INSTANCE_HREF = "/api/clouds/1/instances/abc123"


def make_right_script(href: str, revision: int, name: str = "barbaz") -> MagicMock:
    """A RightScript resource with an href, revision and name."""
    right_script = MagicMock(href=href, revision=revision)
    right_script.name = name
    return right_script


@pytest.fixture
def instance():
    """The single instance matched by the happy-path client."""
    instance = MagicMock(name="instance")
    instance.href = INSTANCE_HREF
    return instance


@pytest.fixture
def client(instance):
    """
    A client where tag "foo" matches one instance, and the RightScript
    lineage has revisions 1 (href1) and 2 (href2).
    """
    client = MagicMock(name="client")
    client.by_tag.return_value = [
        MagicMock(links=[{"rel": "resource", "href": INSTANCE_HREF}])
    ]
    client.resource.return_value = instance
    client.right_scripts.return_value = [
        make_right_script("href1", 1),
        make_right_script("href2", 2),
    ]
    return client
