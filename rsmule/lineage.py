"""
RightScript lineage lookup.

A lineage is every revision of a RightScript that shares one name. Revision 0
is the HEAD (uncommitted) revision; committed revisions count up from 1.
"""

import logging

from rsmule.errors import RightScriptNotFound
from rsmule.right_api.protocol import ApiResource, RightApi


logger = logging.getLogger(__name__)

LATEST = "latest"


def find_right_script_lineage_by_name(client: RightApi, name: str) -> list[ApiResource]:
    """
    Fetch the entire lineage (all revisions) of a RightScript by name.

    Args:
        client: API client
        name: Exact name of the RightScript

    Returns:
        RightScript resources, one per revision

    Raises:
        RightScriptNotFound: If no RightScripts have that name
    """
    # The API filter also matches partial names
    lineage = [rs for rs in client.right_scripts(filters=[f"name=={name}"]) if rs.name == name]
    if len(lineage) == 0:
        raise RightScriptNotFound(f"No RightScripts with the name ({name}) were found.")
    logger.debug(f"Found {len(lineage)} revision(s) of RightScript '{name}'")
    return lineage


def right_script_revision_from_lineage(lineage: list[ApiResource], revision: str | int = LATEST) -> ApiResource:
    """
    Pick one revision of a RightScript out of its lineage.

    Args:
        lineage: RightScript resources sharing a name
        revision: "latest" for the highest revision number, otherwise the
            exact revision to use ("0" for HEAD)

    Returns:
        The selected RightScript resource

    Raises:
        RightScriptNotFound: If the requested revision is not in the lineage
    """
    if not lineage:
        raise RightScriptNotFound("RightScript lineage is empty")

    if str(revision) == LATEST:
        latest = None
        for right_script in lineage:
            if right_script.revision is None:
                continue
            # >= so that the last of equal revisions wins
            if latest is None or right_script.revision >= latest.revision:
                latest = right_script
        if latest is None:
            raise RightScriptNotFound("No entry in the RightScript lineage has a revision number")
        return latest

    for right_script in lineage:
        if str(right_script.revision) == str(revision):
            return right_script

    available = [rs.revision for rs in lineage]
    raise RightScriptNotFound(
        f"RightScript revision ({revision}) was not found. Available revisions are ({available})"
    )
