from typing import List, Optional

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from constants.constants import DEFAULT_VOTING_PERIOD_SECONDS, PROPOSAL_ACCOUNT_SPACE
from governance.errors import WalletNotConnected
from governance.models.results import CreateProposalResult, TransactionResult
from governance.rpc_client import SolanaRpcClient
from governance.service.instruction_builder import (
    AddressLike,
    build_create_proposal,
    build_execute_proposal,
    build_vote,
    encode_create_proposal,
)
from governance.wallet import Wallet
from utils.formatter_utils import to_pubkey
from utils.logger_utils import get_logger

logger = get_logger("Governance Service")


def build_transaction(instructions: List[Instruction], payer: Pubkey, blockhash: Hash) -> Transaction:
    """Unsigned transaction with `payer` as fee payer."""
    message = Message.new_with_blockhash(instructions, payer, blockhash)
    return Transaction.new_unsigned(message)


class GovernanceService(object):
    """
    Create, vote and execute flows: build instructions, sign with the wallet,
    send and confirm through the RPC client.

    Input errors are raised before any network call. Transport errors
    propagate unchanged.
    """

    def __init__(
        self,
        rpc_client: SolanaRpcClient,
        program_id: str,
        account_space: int = PROPOSAL_ACCOUNT_SPACE,
    ):
        self._rpc_client = rpc_client
        self.program_id = program_id
        self.account_space = account_space

    @staticmethod
    def _require_wallet(wallet: Optional[Wallet]) -> Wallet:
        if wallet is None:
            raise WalletNotConnected()
        return wallet

    async def _sign_and_send(self, wallet: Wallet, transaction: Transaction) -> str:
        signed = wallet.sign_transaction(transaction)
        signature = await self._rpc_client.send_transaction(signed)
        await self._rpc_client.confirm_transaction(signature)
        return signature

    async def create_proposal(
        self,
        wallet: Optional[Wallet],
        title: str,
        description: str,
        ai_summary: str,
        ai_sentiment: str,
        voting_period: int = DEFAULT_VOTING_PERIOD_SECONDS,
    ) -> CreateProposalResult:
        wallet = self._require_wallet(wallet)
        # Reject bad arguments before the rent-exemption lookup
        encode_create_proposal(title, description, ai_summary, ai_sentiment, voting_period)
        to_pubkey(self.program_id)
        payer = wallet.pubkey()

        lamports = await self._rpc_client.get_minimum_balance_for_rent_exemption(self.account_space)
        bundle = build_create_proposal(
            payer=payer,
            title=title,
            description=description,
            ai_summary=ai_summary,
            ai_sentiment=ai_sentiment,
            voting_period=voting_period,
            lamports=lamports,
            program_id=self.program_id,
            space=self.account_space,
        )

        blockhash = await self._rpc_client.get_latest_blockhash()
        transaction = build_transaction(bundle.instructions, payer, blockhash)
        # The new account signs first, then the wallet as fee payer
        transaction.partial_sign([bundle.proposal_keypair], blockhash)

        signature = await self._sign_and_send(wallet, transaction)
        proposal_pubkey = str(bundle.proposal_pubkey)
        logger.info(f"Created proposal {proposal_pubkey} (signature {signature})")
        return CreateProposalResult(proposal_pubkey=proposal_pubkey, signature=signature)

    async def vote_on_proposal(self, wallet: Optional[Wallet], proposal: AddressLike, is_for: bool) -> TransactionResult:
        wallet = self._require_wallet(wallet)
        voter = wallet.pubkey()
        bundle = build_vote(voter, proposal, is_for, self.program_id)

        blockhash = await self._rpc_client.get_latest_blockhash()
        transaction = build_transaction(bundle.instructions, voter, blockhash)
        signature = await self._sign_and_send(wallet, transaction)
        logger.info(f"Vote {'for' if is_for else 'against'} {proposal} confirmed (signature {signature})")
        return TransactionResult(signature=signature)

    async def execute_proposal(self, wallet: Optional[Wallet], proposal: AddressLike) -> TransactionResult:
        wallet = self._require_wallet(wallet)
        invoker = wallet.pubkey()
        bundle = build_execute_proposal(invoker, proposal, self.program_id)

        blockhash = await self._rpc_client.get_latest_blockhash()
        transaction = build_transaction(bundle.instructions, invoker, blockhash)
        signature = await self._sign_and_send(wallet, transaction)
        logger.info(f"Executed proposal {proposal} (signature {signature})")
        return TransactionResult(signature=signature)
