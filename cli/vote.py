import asyncio

import click

from config.settings import settings
from governance.rpc_client import SolanaRpcClient
from governance.service.governance_service import GovernanceService
from governance.wallet import KeypairWallet
from utils.formatter_utils import to_pretty_json
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Vote CLI")


async def _vote(rpc_url: str, program_id: str, wallet: KeypairWallet, proposal: str, is_for: bool):
    async with SolanaRpcClient(
        rpc_url,
        commitment=settings.solana.commitment,
        timeout=settings.solana.rpc_timeout,
        confirm_timeout=settings.solana.confirm_timeout_seconds,
        confirm_poll_interval=settings.solana.confirm_poll_interval_seconds,
    ) as rpc_client:
        service = GovernanceService(rpc_client, program_id)
        return await service.vote_on_proposal(wallet, proposal, is_for)


@click.command()
@click.argument("proposal", type=str)
@click.option("--for/--against", "is_for", default=True, show_default=True, help="Direction of the vote.")
@click.option("--keypair", default=settings.governance.wallet_keypair_path, show_default=True, type=str, help="Keypair file of the voter.")
@click.option("--rpc-url", default=settings.solana.rpc_url, show_default=True, type=str, help="Solana JSON-RPC URL.")
@click.option("--program-id", default=settings.solana.program_id, show_default=True, type=str, help="Governance program address.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def vote(proposal: str, is_for: bool, keypair: str, rpc_url: str, program_id: str, log_file: str):
    """
    Casts a vote with weight 1 on PROPOSAL.
    """
    configure_logging(log_file, settings.app.effective_log_level)
    wallet = KeypairWallet.from_file(keypair)
    logger.info(f"Voting {'for' if is_for else 'against'} {proposal} as {wallet.pubkey()}...")

    result = asyncio.run(_vote(rpc_url, program_id, wallet, proposal, is_for))
    click.echo(to_pretty_json(result.model_dump()))


if __name__ == "__main__":
    vote()
