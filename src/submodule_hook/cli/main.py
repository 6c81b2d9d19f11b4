"""Main CLI interface for submodule-hook."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from submodule_hook.cli.setup_hooks import install_hook, uninstall_hook
from submodule_hook.config import HookConfig
from submodule_hook.core.gateway import GitGateway
from submodule_hook.errors import GatewayError, HookInstallError
from submodule_hook.hooks.prepare_commit_msg import build_block, prepare_message, run_hook
from submodule_hook.logging_setup import configure_logging

console = Console()
err_console = Console(stderr=True)

repo_option = click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path inside the target repository",
)


@click.group()
@click.version_option(package_name="submodule-hook")
@click.pass_context
def main(ctx: click.Context):
    """Submodule Hook - summarize submodule updates in commit messages."""
    config = HookConfig.from_env()
    configure_logging(config)
    ctx.obj = config


@main.command()
@repo_option
@click.option("--force", is_flag=True, help="Overwrite an existing prepare-commit-msg hook")
def install(repo_path: str, force: bool):
    """Install the prepare-commit-msg hook."""
    try:
        hook_file = install_hook(Path(repo_path).resolve(), force=force)
    except HookInstallError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e
    console.print(f"[green]✅ Installed hook at {hook_file}[/green]")


@main.command()
@repo_option
def uninstall(repo_path: str):
    """Remove the prepare-commit-msg hook."""
    try:
        removed = uninstall_hook(Path(repo_path).resolve())
    except HookInstallError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e
    if removed:
        console.print("[green]✅ Hook removed[/green]")
    else:
        console.print("[yellow]No submodule-hook installed[/yellow]")


@main.command("prepare-commit-msg")
@click.argument("message_file", type=click.Path(dir_okay=False))
@click.argument("source", required=False)
@click.argument("sha", required=False)
@click.pass_obj
def prepare_commit_msg(config: HookConfig, message_file: str, source: Optional[str], sha: Optional[str]):
    """Run the hook by hand with git's prepare-commit-msg arguments."""
    try:
        run_hook(Path.cwd(), Path(message_file), source, sha, config)
    except GatewayError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise click.exceptions.Exit(1) from e


@main.command()
@repo_option
@click.option("--amend", is_flag=True, help="Compare against HEAD's parent as an amend would")
@click.option("-m", "--message", default=None, help="Draft message to splice the block into")
@click.pass_obj
def preview(config: HookConfig, repo_path: str, amend: bool, message: Optional[str]):
    """Show the submodule block for the currently staged changes."""
    gateway = GitGateway(Path(repo_path))
    try:
        if message is None:
            block = build_block(gateway, gateway.parent_revision(amend), config)
            text = "\n".join(block) if block else None
        else:
            text = prepare_message(gateway, message, config, amend=amend)
    except GatewayError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    if text is None:
        console.print("[yellow]No submodule changes staged[/yellow]")
        return
    console.print(Panel(Text(text), title="Commit message" if message is not None else "Submodule changes", expand=False))


if __name__ == "__main__":
    main()
