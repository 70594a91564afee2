"""Resolve a user-supplied token to a single VPS record."""

import logging

from .client import VPSClient
from .exceptions import ApiError, NotFoundError
from ..models.vm import VM

logger = logging.getLogger(__name__)


async def resolve_vm(client: VPSClient, token: str) -> VM:
    """Find a VPS by exact ID, falling back to an exact name match.

    The direct ID lookup is tried first. Only a service rejection (ApiError)
    triggers the name search; transport failures propagate unchanged.
    Names are compared case-sensitively and the first match in list order
    wins.

    Args:
        client: Connected VPS client
        token: VM ID or name

    Returns:
        The matching VM

    Raises:
        NotFoundError: If neither an ID nor a name matches
        TransportError: If the service is unreachable
    """
    if not token:
        raise NotFoundError("VPS", token)

    try:
        return await client.get_vm(token)
    except ApiError as e:
        logger.debug("Direct lookup of '%s' failed (%s), searching by name", token, e)

    matches = [vm for vm in await client.list_vms() if vm.name == token]
    if not matches:
        raise NotFoundError("VPS", token)

    if len(matches) > 1:
        logger.warning(
            "%d VPS instances are named '%s'; using %s",
            len(matches),
            token,
            matches[0].id,
        )
    return matches[0]
