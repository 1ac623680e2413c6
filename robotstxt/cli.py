"""
robots.txt checker - CLI Interface

Usage:
    robotstxt check <file> <url>... [--agent NAME]
    robotstxt inspect <file> [--agent NAME]
    robotstxt robots-url <url>
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from robotstxt import InvalidRobotsError, Robot, RobotsUrlError, get_robots_url
from robotstxt.config import get_config
from robotstxt.logging_config import configure_logging

app = typer.Typer(
    name="robotstxt",
    help="Check URLs against a local robots.txt file",
    add_completion=False
)

console = Console()


def load_robot(path: Path, agent: Optional[str], verbose: bool) -> Robot:
    """Read, clip and parse a robots.txt file for the CLI commands."""
    config = get_config(log_level="DEBUG") if verbose else get_config()
    configure_logging(config.log_level, config.log_file)

    agent = agent or config.user_agent
    body = config.clip(path.read_bytes())

    try:
        return Robot(agent, body)
    except InvalidRobotsError as e:
        # Unreadable robots.txt means no restrictions
        console.print(f"[yellow]Could not parse {escape(str(path))}: {escape(str(e))}; allowing everything[/yellow]")
        return Robot.permissive(agent)


@app.command()
def check(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="robots.txt file"),
    urls: list[str] = typer.Argument(..., help="URLs or paths to check"),
    agent: Optional[str] = typer.Option(None, "--agent", "-a", help="Crawler name (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Check whether URLs may be crawled.

    Exits with status 1 when any URL is blocked.

    Examples:
        robotstxt check robots.txt /admin /blog --agent FerrisCrawler
        robotstxt check robots.txt https://example.com/private
    """
    robot = load_robot(path, agent, verbose)

    blocked = 0
    for url in urls:
        if robot.allowed(url):
            console.print(f"[green]ALLOWED[/green] {escape(url)}")
        else:
            console.print(f"[red]BLOCKED[/red] {escape(url)}")
            blocked += 1

    if blocked:
        raise typer.Exit(1)


@app.command()
def inspect(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="robots.txt file"),
    agent: Optional[str] = typer.Option(None, "--agent", "-a", help="Crawler name (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Show the groups in a robots.txt file and the rules selected for an agent.
    """
    robot = load_robot(path, agent, verbose)

    groups = Table(title="User-agent groups")
    groups.add_column("#", style="dim")
    groups.add_column("Agents", style="cyan")
    groups.add_column("Rules", justify="right")
    groups.add_column("Crawl-delay", justify="right")
    for index, group in enumerate(robot.groups, start=1):
        agents = ", ".join(group.agents)
        if group.implicit:
            agents += " (implicit)"
        delay = "N/A" if group.crawl_delay is None else str(group.crawl_delay)
        groups.add_row(str(index), escape(agents), str(len(group.rules)), delay)
    console.print(groups)

    rules = Table(title=f"Rules for {escape(robot.agent)}")
    rules.add_column("Directive", style="cyan")
    rules.add_column("Pattern", style="green")
    for rule in robot.rules:
        rules.add_row("Allow" if rule.allow else "Disallow", escape(rule.raw) or "(empty)")
    console.print(rules)

    console.print(f"Crawl-delay: {'N/A' if robot.delay is None else robot.delay}")
    for sitemap in robot.sitemaps:
        console.print(f"Sitemap: {sitemap}", markup=False)

    issues = robot.document.issues
    if issues:
        console.print(f"\n[yellow]{len(issues)} line(s) skipped[/yellow]")
        for issue in issues:
            console.print(f"  {issue}", markup=False)


@app.command("robots-url")
def robots_url(
    url: str = typer.Argument(..., help="Page URL"),
):
    """
    Print the robots.txt URL governing a page.
    """
    try:
        console.print(get_robots_url(url), markup=False)
    except RobotsUrlError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
