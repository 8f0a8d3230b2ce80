import asyncio

import click

from config.settings import settings
from governance.rpc_client import SolanaRpcClient
from governance.service.governance_service import GovernanceService
from governance.wallet import KeypairWallet
from utils.formatter_utils import to_pretty_json
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Execute Proposal CLI")


async def _execute(rpc_url: str, program_id: str, wallet: KeypairWallet, proposal: str):
    async with SolanaRpcClient(
        rpc_url,
        commitment=settings.solana.commitment,
        timeout=settings.solana.rpc_timeout,
        confirm_timeout=settings.solana.confirm_timeout_seconds,
        confirm_poll_interval=settings.solana.confirm_poll_interval_seconds,
    ) as rpc_client:
        service = GovernanceService(rpc_client, program_id)
        return await service.execute_proposal(wallet, proposal)


@click.command()
@click.argument("proposal", type=str)
@click.option("--keypair", default=settings.governance.wallet_keypair_path, show_default=True, type=str, help="Keypair file of the invoker.")
@click.option("--rpc-url", default=settings.solana.rpc_url, show_default=True, type=str, help="Solana JSON-RPC URL.")
@click.option("--program-id", default=settings.solana.program_id, show_default=True, type=str, help="Governance program address.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def execute_proposal(proposal: str, keypair: str, rpc_url: str, program_id: str, log_file: str):
    """
    Executes a passed PROPOSAL.
    """
    configure_logging(log_file, settings.app.effective_log_level)
    wallet = KeypairWallet.from_file(keypair)
    logger.info(f"Executing {proposal} as {wallet.pubkey()}...")

    try:
        result = asyncio.run(_execute(rpc_url, program_id, wallet, proposal))
    except Exception:
        logger.exception("An error occurred while executing the proposal:")
        raise
    click.echo(to_pretty_json(result.model_dump()))


if __name__ == "__main__":
    execute_proposal()
