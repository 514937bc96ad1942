"""Host selection — maps a role hint and attempt number to a hostname.

Naming scheme::

    read, attempt 0      {app_id}-dsn.algolia.net
    write, attempt 0     {app_id}.algolia.net
    insights, any        insights.algolia.io
    everything else      {app_id}-{order[(attempt - 1) % len(order)]}.algolianet.com

Host selection is a pure function of its arguments so concurrent
dispatches can share one ``HostSettings`` instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from algolia_client.models.request import Role

if TYPE_CHECKING:
    from algolia_client.config.settings import HostSettings


def select_host(role: Role, attempt: int, application_id: str, hosts: HostSettings) -> str:
    """Pick the host for one attempt.

    Args:
        role: Role hint of the request.
        attempt: Zero-based attempt number.
        application_id: Algolia application ID.
        hosts: Host naming configuration.

    Returns:
        A bare hostname, without scheme.
    """
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")

    role = Role(role)
    if role is Role.INSIGHTS:
        return hosts.insights_host
    if attempt == 0 and role is Role.READ:
        return f"{application_id}-dsn.{hosts.domain}"
    if attempt == 0 and role is Role.WRITE:
        return f"{application_id}.{hosts.domain}"

    order = hosts.fallback_host_order
    suffix = order[(attempt - 1) % len(order)]
    return f"{application_id}-{suffix}.{hosts.fallback_domain}"


def build_url(role: Role, attempt: int, application_id: str, hosts: HostSettings, path: str) -> str:
    """Return the absolute ``https`` URL for *path* on the selected host."""
    if not path.startswith("/"):
        path = "/" + path
    return f"https://{select_host(role, attempt, application_id, hosts)}{path}"
