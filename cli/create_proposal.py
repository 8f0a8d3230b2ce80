import asyncio
from typing import Optional

import click

from config.settings import settings
from governance.analysis_client import AnalysisClient
from governance.models.results import ProposalAnalysis
from governance.rpc_client import SolanaRpcClient
from governance.service.governance_service import GovernanceService
from governance.wallet import KeypairWallet
from utils.formatter_utils import make_proposal_title, to_pretty_json
from utils.logger_utils import configure_logging, get_logger
from utils.validation_utils import validate_proposal_text

logger = get_logger("Create Proposal CLI")


async def _create_proposal(
    rpc_url: str,
    program_id: str,
    wallet: KeypairWallet,
    text: str,
    title: Optional[str],
    summary: Optional[str],
    sentiment: Optional[str],
    analyze: bool,
    voting_period: int,
):
    if analyze:
        async with AnalysisClient() as analysis_client:
            analysis = await analysis_client.analyze(text)
    else:
        fields = {key: value for key, value in (("summary", summary), ("sentiment", sentiment)) if value}
        analysis = ProposalAnalysis(**fields)

    async with SolanaRpcClient(
        rpc_url,
        commitment=settings.solana.commitment,
        timeout=settings.solana.rpc_timeout,
        confirm_timeout=settings.solana.confirm_timeout_seconds,
        confirm_poll_interval=settings.solana.confirm_poll_interval_seconds,
    ) as rpc_client:
        service = GovernanceService(rpc_client, program_id, account_space=settings.governance.proposal_account_space)
        return await service.create_proposal(
            wallet,
            title=title or make_proposal_title(text),
            description=text,
            ai_summary=analysis.summary,
            ai_sentiment=analysis.sentiment,
            voting_period=voting_period,
        )


@click.command()
@click.argument("text", type=str)
@click.option("--title", default=None, type=str, help="Proposal title. Derived from the text if omitted.")
@click.option("--summary", default=None, type=str, help="Analysis summary stored with the proposal.")
@click.option("--sentiment", default=None, type=str, help="Analysis sentiment stored with the proposal.")
@click.option("--analyze", is_flag=True, default=False, help="Fetch summary and sentiment from the analysis endpoint.")
@click.option("--voting-period", default=settings.governance.default_voting_period, show_default=True, type=int, help="Voting period in seconds.")
@click.option("--keypair", default=settings.governance.wallet_keypair_path, show_default=True, type=str, help="Keypair file of the paying wallet.")
@click.option("--rpc-url", default=settings.solana.rpc_url, show_default=True, type=str, help="Solana JSON-RPC URL.")
@click.option("--program-id", default=settings.solana.program_id, show_default=True, type=str, help="Governance program address.")
@click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")
def create_proposal(
    text: str,
    title: str,
    summary: str,
    sentiment: str,
    analyze: bool,
    voting_period: int,
    keypair: str,
    rpc_url: str,
    program_id: str,
    log_file: str,
):
    """
    Creates a new proposal account holding TEXT as its description.
    """
    configure_logging(log_file, settings.app.effective_log_level)
    try:
        validate_proposal_text(text)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="TEXT")

    wallet = KeypairWallet.from_file(keypair)
    logger.info(f"Creating proposal as {wallet.pubkey()}...")

    result = asyncio.run(
        _create_proposal(rpc_url, program_id, wallet, text, title, summary, sentiment, analyze, voting_period)
    )
    click.echo(to_pretty_json(result.model_dump()))


if __name__ == "__main__":
    create_proposal()
