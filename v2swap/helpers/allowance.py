"""
Router allowance check and the infinite approve() transaction.

The router is approved for ``MAX_APPROVAL`` once; any allowance below that
sentinel triggers a fresh approval.
"""
from __future__ import annotations

import logging

from eth_typing import ChecksumAddress

from v2swap.config.abis import ERC20_ABI
from v2swap.errors import ApprovalFailure, SwapError, TransactionReverted
from v2swap.helpers.chain_client import CallMethodOpts

__all__ = ["MAX_APPROVAL", "is_approved", "check_approved", "submit_approval"]

logger = logging.getLogger(__name__)

MAX_APPROVAL = (1 << 256) - 1         # 2**256 − 1


def is_approved(allowance: int) -> bool:
    return allowance >= MAX_APPROVAL


def check_approved(
    client,
    owner: ChecksumAddress,
    spender: ChecksumAddress,
    token: ChecksumAddress,
) -> bool:
    """Read allowance(owner, spender) on *token* and compare with the sentinel."""
    (allowance,) = client.call_contract_constant(token, ERC20_ABI, "allowance", owner, spender)
    allowance = int(allowance)
    logger.info("approved amount is: %s, maxApprove is: %s", allowance, MAX_APPROVAL)
    return is_approved(allowance)


def submit_approval(client, settings, gas_price: int) -> str:
    """Approve the router for MAX_APPROVAL of the spend token and wait for it.

    Returns the approval tx hash. Any failure is raised as ApprovalFailure.
    """
    tx_hash = None
    try:
        nonce = client.nonce_at(settings.wallet_address)
        logger.info("current nonce is: %s", nonce)

        opts = CallMethodOpts(nonce=nonce, gas_price=gas_price, gas_limit=settings.gas_limit)
        tx = client.build_call_method_tx(
            settings.private_key,
            settings.token_in.address,
            ERC20_ABI,
            "approve",
            opts,
            settings.router_address,
            MAX_APPROVAL,
        )
        tx_hash = client.send_raw_transaction(tx.tx_hex)
        logger.info("approve tx sent: %s", tx_hash)

        receipt = client.wait_confirm(tx_hash, settings.poll_interval, settings.confirm_timeout)
        if receipt["status"] != 1:
            raise TransactionReverted(tx_hash)
    except SwapError as exc:
        raise ApprovalFailure(f"approve failed: {exc}", tx_hash=tx_hash) from exc

    logger.info("approve transaction is packed")
    return tx_hash
