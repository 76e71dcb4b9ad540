"""
Web3 setup helper - provides the shared web3 instance.

Public API
----------
get_web3_instance(rpc_url=None, timeout=5.0)
    Return a Web3 instance connected to the specified RPC URL.
    Falls back to the RPC_URL environment variable.
"""
from __future__ import annotations

import os
from typing import Optional

from web3 import Web3

__all__ = ["get_web3_instance"]

# Cached web3 instance
_w3_instance: Optional[Web3] = None


def get_web3_instance(rpc_url: str | None = None, timeout: float = 5.0) -> Web3:
    """
    Get a Web3 instance connected to the specified RPC URL.

    Every HTTP request made through the instance is bounded by *timeout*.

    Args:
        rpc_url: Optional RPC URL. If not provided, uses the RPC_URL env var.
        timeout: Per-request timeout in seconds.

    Returns:
        Web3 instance

    Raises:
        RuntimeError: If no RPC URL is available
    """
    global _w3_instance

    if rpc_url is None:
        rpc_url = os.getenv("RPC_URL")

    if rpc_url is None:
        raise RuntimeError("No RPC URL available. Set the RPC_URL environment variable.")

    # Return cached instance if URL matches
    if _w3_instance is not None and _w3_instance.provider.endpoint_uri == rpc_url:
        return _w3_instance

    _w3_instance = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    return _w3_instance
