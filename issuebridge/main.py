#!/usr/bin/env python3
"""
Issue Bridge Main Entry Point - triage issues and run the MCP bridge server
"""
import asyncio
import json
import logging
from pathlib import Path

import click

from .__version__ import __version__, get_version_info
from .config import DEFAULT_CONFIG_PATH, BridgeConfig
from .exceptions import BridgeError, PartialHybridFailure
from .triage import (
    AgentReadinessAssessor,
    HybridCoordinator,
    HybridIssueRequest,
    IssueClassifier,
    LabelGenerator,
    Platform,
)


def setup_logging(log_file_path=".issuebridge/issuebridge.log", debug=False):
    """Setup logging with proper file path from configuration"""
    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    # Clear any existing handlers
    logging.getLogger().handlers.clear()

    # StreamHandler writes to stderr, which keeps stdout free for MCP stdio
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file_path, encoding="utf-8", errors="replace"),
        ],
    )


logger = logging.getLogger(__name__)


def format_json_pretty(data):
    """Format JSON data for readable terminal display"""
    return json.dumps(data, indent=2, ensure_ascii=False)


@click.group(invoke_without_command=True)
@click.option("--config", default=DEFAULT_CONFIG_PATH, help="Configuration file path")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--version", is_flag=True, help="Show version information")
@click.pass_context
def cli(ctx, config, debug, version):
    """Issue Bridge - route and link work between GitHub and Linear"""
    if version:
        click.echo(get_version_info())
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    bridge_config = BridgeConfig.from_file(config)
    setup_logging(bridge_config.log_file, debug or bridge_config.log_level == "DEBUG")

    if debug:
        logger.debug("Debug logging enabled")

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["config"] = bridge_config


@cli.command()
@click.option(
    "--transport",
    default="stdio",
    type=click.Choice(["stdio"]),
    help="MCP transport",
)
def serve(transport):
    """Run the MCP server exposing the bridge tools"""
    from .mcp import run_bridge_server

    logger.info(f"Starting Issue Bridge MCP server {__version__} on {transport}")
    run_bridge_server(transport)


@cli.command()
@click.argument("title")
@click.option("--description", default="", help="Issue description")
@click.option("--label", "labels", multiple=True, help="Existing label (repeatable)")
@click.option(
    "--format",
    "output_format",
    default="text",
    type=click.Choice(["text", "json"]),
    help="Output format",
)
def triage(title, description, labels, output_format):
    """Decide whether an issue belongs on GitHub, Linear, or both"""
    decision = IssueClassifier().triage(title, description, list(labels))

    if output_format == "json":
        click.echo(format_json_pretty(decision.to_dict()))
        return

    click.echo(f"Platform:   {decision.platform.value}")
    click.echo(f"Confidence: {decision.confidence:.0%}")
    click.echo(f"Reasoning:  {decision.reasoning}")
    if decision.suggested_labels:
        click.echo(f"Labels:     {', '.join(decision.suggested_labels)}")


@cli.command()
@click.argument("title")
@click.option("--body", default="", help="Issue body")
@click.option(
    "--platform",
    default="github",
    type=click.Choice(["github", "linear", "hybrid", "engineering", "business"]),
    help="Target platform",
)
def labels(title, body, platform):
    """Generate labels for an issue"""
    for label in LabelGenerator().generate_labels(title, body, platform):
        click.echo(label)


@cli.command()
@click.argument("title")
@click.option("--body", default="", help="Issue body")
def assess(title, body):
    """Assess whether an issue is ready for an automated agent"""
    assessment = AgentReadinessAssessor().assess_text(title, body)
    click.echo(format_json_pretty(assessment.to_dict()))


@cli.command()
@click.argument("title")
@click.option("--description", default="", help="Issue description")
@click.option("--owner", help="GitHub repository owner")
@click.option("--repo", help="GitHub repository name")
@click.option("--team-id", help="Linear team ID")
@click.option("--label", "labels", multiple=True, help="Label for both issues (repeatable)")
@click.option("--assignee", help="GitHub username to assign")
@click.option("--priority", type=click.IntRange(0, 4), help="Linear priority (0-4)")
@click.pass_context
def hybrid(ctx, title, description, owner, repo, team_id, labels, assignee, priority):
    """Create linked GitHub and Linear issues"""
    from .integrations import GitHubClient, LinearClient

    config = ctx.obj["config"]
    request = HybridIssueRequest(
        title=title,
        description=description,
        owner=owner,
        repo=repo,
        team_id=team_id,
        platform=Platform.HYBRID,
        labels=list(labels),
        assignee=assignee,
        priority=priority,
    )

    async def _create():
        HybridCoordinator.validate(request)
        async with GitHubClient(config) as github, LinearClient(config) as linear:
            return await HybridCoordinator(github, linear).create_hybrid_issue(request)

    try:
        result = asyncio.run(_create())
    except PartialHybridFailure as e:
        click.echo(f"Partial failure: {e}", err=True)
        click.echo(f"Orphaned GitHub issue: {e.orphaned_issue.url}", err=True)
        ctx.exit(2)
    except BridgeError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"GitHub: {result.github_issue.url}")
    click.echo(f"Linear: {result.linear_issue.url}")


def main():
    """Entry point for the console script"""
    cli()


if __name__ == "__main__":
    main()
