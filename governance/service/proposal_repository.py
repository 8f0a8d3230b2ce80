from typing import List

from constants.constants import FALLBACK_SCAN_STEP, MIN_ACCOUNT_DATA_SIZE
from governance.errors import ProposalNotFound
from governance.models.proposal import Proposal
from governance.rpc_client import SolanaRpcClient
from governance.service.account_decoder import decode_proposal_account, try_decode_proposal_account
from utils.logger_utils import get_logger

logger = get_logger("Proposal Repository")


class ProposalRepository(object):
    """
    Reads proposal accounts owned by the governance program.

    Holds no cache: every call fetches and decodes from scratch.
    """

    def __init__(
        self,
        rpc_client: SolanaRpcClient,
        program_id: str,
        fallback_step: int = FALLBACK_SCAN_STEP,
        min_account_size: int = MIN_ACCOUNT_DATA_SIZE,
    ):
        self._rpc_client = rpc_client
        self.program_id = program_id
        self.fallback_step = fallback_step
        self.min_account_size = min_account_size

    async def list_proposals(self) -> List[Proposal]:
        """
        Returns every decodable proposal in the order the node returned them.

        Accounts that cannot be decoded are left out. A failed bulk fetch
        raises TransportFailure.
        """
        accounts = await self._rpc_client.get_program_accounts(self.program_id)

        proposals = []
        for address, data in accounts:
            proposal = try_decode_proposal_account(
                address, data, step=self.fallback_step, min_size=self.min_account_size
            )
            if proposal is not None:
                proposals.append(proposal)

        skipped = len(accounts) - len(proposals)
        if skipped:
            logger.warning(f"Skipped {skipped} of {len(accounts)} program accounts that are not valid proposals")
        logger.info(f"Loaded {len(proposals)} proposals")
        return proposals

    async def get_proposal(self, address: str) -> Proposal:
        """
        Raises:
            ProposalNotFound: If the account does not exist.
            UnrecoverableAccount: If the account data is not a proposal.
        """
        data = await self._rpc_client.get_account_info(address)
        if data is None:
            raise ProposalNotFound(address)
        return decode_proposal_account(address, data, step=self.fallback_step, min_size=self.min_account_size)
