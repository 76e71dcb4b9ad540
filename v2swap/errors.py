"""
Exception hierarchy for the swap tool.

Every component raises one of these and chains the underlying web3 /
transport error with ``raise ... from exc``. Only the executor catches them.
"""


class SwapError(Exception):
    """Base class for every failure that aborts a swap run."""


class ConfigError(SwapError):
    """Malformed configuration value (bad address, bad hex, bad number)."""


class InitCodeHashDecodeError(ConfigError):
    """The pair init-code hash literal is not 32 bytes of hex."""


class RPCError(SwapError):
    """Read call against the node failed or timed out."""


class InsufficientBalanceError(SwapError):
    """Spend-token or native balance too low to go ahead."""


class ApprovalFailure(SwapError):
    """Building, sending or confirming the approve() transaction failed.

    ``tx_hash`` is set once the approval has been broadcast.
    """

    def __init__(self, message: str, tx_hash: str | None = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class SwapBuildFailure(SwapError):
    """Encoding or signing the swap transaction failed."""


class BroadcastFailure(SwapError):
    """Sending a signed transaction or waiting for it failed."""


class ConfirmationTimeout(BroadcastFailure):
    """Transaction was not mined within the confirmation timeout."""

    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"transaction {tx_hash} not mined after {timeout}s")
        self.tx_hash = tx_hash
        self.timeout = timeout


class TransactionReverted(BroadcastFailure):
    """Transaction was mined with status 0."""

    def __init__(self, tx_hash: str):
        super().__init__(f"transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
