from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClientInfo:
    """
    Audit data about the calling client.

    :param ip_address: Remote address as seen after proxy handling.
    :type ip_address: str | None
    :param user_agent: ``User-Agent`` header, truncated to the column width.
    :type user_agent: str | None
    """

    ip_address: str | None = None
    user_agent: str | None = None
