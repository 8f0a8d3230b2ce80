import click

from cli.create_proposal import create_proposal
from cli.execute_proposal import execute_proposal
from cli.get_proposal import get_proposal
from cli.list_proposals import list_proposals
from cli.vote import vote


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Read proposals
cli.add_command(list_proposals, "list_proposals")
cli.add_command(get_proposal, "get_proposal")

# Write proposals
cli.add_command(create_proposal, "create_proposal")
cli.add_command(vote, "vote")
cli.add_command(execute_proposal, "execute_proposal")
