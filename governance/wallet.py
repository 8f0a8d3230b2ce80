from pathlib import Path
from typing import Protocol, Union

import orjson
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction


class Wallet(Protocol):
    """Signing authority. Private key material never leaves the wallet."""

    def pubkey(self) -> Pubkey: ...

    def sign_transaction(self, transaction: Transaction) -> Transaction: ...


class KeypairWallet(object):
    """Wallet backed by a local keypair, e.g. the file written by `solana-keygen`."""

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "KeypairWallet":
        raw = orjson.loads(Path(path).expanduser().read_bytes())
        if not isinstance(raw, list) or len(raw) != 64:
            raise ValueError(f"Keypair file {path} must contain a JSON array of 64 bytes")
        return cls(Keypair.from_bytes(bytes(raw)))

    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    def sign_transaction(self, transaction: Transaction) -> Transaction:
        transaction.partial_sign([self._keypair], transaction.message.recent_blockhash)
        return transaction
