import asyncio

import click

from config.settings import settings
from governance.mappers.proposal_mapper import ProposalMapper
from governance.rpc_client import SolanaRpcClient
from governance.service.proposal_repository import ProposalRepository
from utils.formatter_utils import to_pretty_json
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Get Proposal CLI")


async def _get_proposal(rpc_url: str, program_id: str, address: str):
    async with SolanaRpcClient(
        rpc_url,
        commitment=settings.solana.commitment,
        timeout=settings.solana.rpc_timeout,
    ) as rpc_client:
        repository = ProposalRepository(
            rpc_client, program_id, fallback_step=settings.governance.fallback_scan_step
        )
        return await repository.get_proposal(address)


@click.command()
@click.argument("address", type=str)
@click.option("--rpc-url", default=settings.solana.rpc_url, show_default=True, type=str, help="Solana JSON-RPC URL.")
@click.option("--program-id", default=settings.solana.program_id, show_default=True, type=str, help="Governance program address.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def get_proposal(address: str, rpc_url: str, program_id: str, log_file: str):
    """
    Fetches and decodes a single proposal account.
    """
    configure_logging(log_file, settings.app.effective_log_level)
    proposal = asyncio.run(_get_proposal(rpc_url, program_id, address))
    click.echo(to_pretty_json(ProposalMapper.proposal_to_dict(proposal)))


if __name__ == "__main__":
    get_proposal()
