import asyncio

import click

from config.settings import settings
from governance.mappers.proposal_mapper import ProposalMapper
from governance.rpc_client import SolanaRpcClient
from governance.service.proposal_repository import ProposalRepository
from utils.formatter_utils import to_pretty_json
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("List Proposals CLI")


async def _list_proposals(rpc_url: str, program_id: str):
    async with SolanaRpcClient(
        rpc_url,
        commitment=settings.solana.commitment,
        timeout=settings.solana.rpc_timeout,
    ) as rpc_client:
        repository = ProposalRepository(
            rpc_client, program_id, fallback_step=settings.governance.fallback_scan_step
        )
        return await repository.list_proposals()


@click.command()
@click.option("--rpc-url", default=settings.solana.rpc_url, show_default=True, type=str, help="Solana JSON-RPC URL.")
@click.option("--program-id", default=settings.solana.program_id, show_default=True, type=str, help="Governance program address.")
@click.option("--status", default=None, type=click.Choice(["Active", "Passed", "Rejected", "Executed"]), help="Only show proposals with this status.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def list_proposals(rpc_url: str, program_id: str, status: str, log_file: str):
    """
    Lists every proposal account owned by the governance program.
    """
    configure_logging(log_file, settings.app.effective_log_level)
    logger.info(f"Fetching proposals of program {program_id}...")

    proposals = asyncio.run(_list_proposals(rpc_url, program_id))
    if status:
        proposals = [p for p in proposals if p.status_label == status]

    click.echo(to_pretty_json([ProposalMapper.proposal_to_dict(p) for p in proposals]))


if __name__ == "__main__":
    list_proposals()
