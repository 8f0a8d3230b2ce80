import asyncio
import base64
import time
from typing import Any, List, Optional, Tuple

import aiohttp
import orjson
from solders.hash import Hash
from solders.transaction import Transaction

from governance.errors import TransportFailure
from utils.formatter_utils import decode_account_data
from utils.logger_utils import get_logger

logger = get_logger("Solana Rpc Client")

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


class SolanaRpcClient(object):
    """
    Minimal JSON-RPC client for the Solana endpoints the governance client needs.

    Errors surface as TransportFailure; there is no retry or failover here.
    Uses a persistent ClientSession, closed by `close()` or the async context
    manager.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: int = 60,
        confirm_timeout: float = 30.0,
        confirm_poll_interval: float = 0.5,
    ):
        if commitment not in COMMITMENT_LEVELS:
            raise ValueError(f"Unknown commitment level: {commitment}")

        self.rpc_url = rpc_url
        self.commitment = commitment
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.confirm_timeout = confirm_timeout
        self.confirm_poll_interval = confirm_poll_interval
        self.id_counter = 0
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Lazy loads or returns the existing session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    def _generate_id(self) -> int:
        self.id_counter += 1
        return self.id_counter

    async def _call(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": self._generate_id(),
            "method": method,
            "params": params,
        }
        session = await self._get_session()

        try:
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status != 200:
                    logger.error(f"RPC HTTP Error {response.status} for {method} at {self.rpc_url}")
                    raise TransportFailure(method, f"HTTP {response.status}", code=response.status)
                data = await response.json(loads=orjson.loads, content_type=None)
        except aiohttp.ClientError as e:
            logger.error(f"Network error calling {method} at {self.rpc_url}: {e}")
            raise TransportFailure(method, str(e)) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout calling {method} at {self.rpc_url}")
            raise TransportFailure(method, "request timed out") from e

        if "error" in data:
            error = data["error"] or {}
            logger.error(f"RPC error for {method}: {error}")
            raise TransportFailure(method, error.get("message", str(error)), code=error.get("code"))
        return data.get("result")

    async def get_program_accounts(self, program_id: str) -> List[Tuple[str, bytes]]:
        """Returns (address, raw data) for every account owned by `program_id`."""
        result = await self._call(
            "getProgramAccounts",
            [program_id, {"encoding": "base64", "commitment": self.commitment}],
        )
        accounts = []
        for item in result or []:
            address = item.get("pubkey")
            data = decode_account_data((item.get("account") or {}).get("data"))
            if address is None or data is None:
                logger.warning(f"Skipping program account without usable data: {address}")
                continue
            accounts.append((address, data))
        logger.info(f"Fetched {len(accounts)} accounts owned by {program_id}")
        return accounts

    async def get_account_info(self, address: str) -> Optional[bytes]:
        result = await self._call(
            "getAccountInfo",
            [address, {"encoding": "base64", "commitment": self.commitment}],
        )
        value = (result or {}).get("value")
        if value is None:
            return None
        return decode_account_data(value.get("data"))

    async def get_minimum_balance_for_rent_exemption(self, space: int) -> int:
        result = await self._call(
            "getMinimumBalanceForRentExemption",
            [space, {"commitment": self.commitment}],
        )
        return int(result)

    async def get_latest_blockhash(self) -> Hash:
        result = await self._call("getLatestBlockhash", [{"commitment": self.commitment}])
        return Hash.from_string(result["value"]["blockhash"])

    async def send_transaction(self, transaction: Transaction) -> str:
        encoded = base64.b64encode(bytes(transaction)).decode("ascii")
        signature = await self._call(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": self.commitment}],
        )
        logger.info(f"Transaction sent with signature: {signature}")
        return signature

    async def confirm_transaction(self, signature: str) -> None:
        """
        Polls getSignatureStatuses until the signature reaches the client's
        commitment level.

        Raises:
            TransportFailure: If the transaction failed or the timeout elapsed.
        """
        required = COMMITMENT_LEVELS.index(self.commitment)
        deadline = time.monotonic() + self.confirm_timeout

        while True:
            result = await self._call("getSignatureStatuses", [[signature]])
            statuses = (result or {}).get("value") or [None]
            status = statuses[0]
            if status is not None:
                if status.get("err"):
                    raise TransportFailure("confirmTransaction", f"transaction {signature} failed: {status['err']}")
                reached = status.get("confirmationStatus")
                if reached in COMMITMENT_LEVELS and COMMITMENT_LEVELS.index(reached) >= required:
                    logger.info(f"Transaction {signature} reached '{reached}'")
                    return

            if time.monotonic() >= deadline:
                raise TransportFailure(
                    "confirmTransaction", f"transaction {signature} not confirmed within {self.confirm_timeout}s"
                )
            await asyncio.sleep(self.confirm_poll_interval)
