"""
Command-line interface for kube-switch

Provides CLI commands for:
- Switching context: kube-switch change-context my-cluster
- Switching namespace: kube-switch change-namespace kube-system
- Shell completion: source <(kube-switch completion)
"""

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .cluster import list_namespaces
from .completion import complete as complete_candidates
from .completion import render_completion_script
from .config import get_config
from .errors import (
    KubeSwitchError,
    MutationRejected,
    PersistError,
)
from .location import resolve_kubeconfig_path
from .logging_setup import configure_logging
from .store import ConfigStore

EXIT_REJECTED = 1
EXIT_IO = 2
EXIT_PERSIST = 3


def _fail(ctx: click.Context, message: str, code: int) -> None:
    click.echo(f"❌ {message}", err=True)
    ctx.exit(code)


def _get_store(ctx: click.Context) -> ConfigStore:
    path = ctx.obj["kubeconfig"] or resolve_kubeconfig_path()
    return ConfigStore(path, settings=ctx.obj["settings"])


def _run_mutation(ctx: click.Context, operation: str, value: str) -> None:
    try:
        store = _get_store(ctx)
        result = getattr(store, operation)(value)
        result.raise_for_rejection()
    except MutationRejected as e:
        _fail(ctx, str(e), EXIT_REJECTED)
    except PersistError as e:
        _fail(ctx, str(e), EXIT_PERSIST)
    except KubeSwitchError as e:
        _fail(ctx, str(e), EXIT_IO)
    else:
        click.echo(result.message)


@click.group()
@click.version_option(version=__version__, prog_name="kube-switch")
@click.option(
    "--kubeconfig",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Kubeconfig file to modify (defaults to $KUBECONFIG or ~/.kube/config)",
)
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def cli(ctx: click.Context, kubeconfig: Optional[Path], log_level: Optional[str]):
    """kube-switch - switch kubeconfig context and namespace"""
    try:
        settings = get_config()
        configure_logging(log_level or settings.log_level, settings.log_format)
    except KubeSwitchError as e:
        _fail(ctx, str(e), EXIT_IO)
    ctx.obj = {"kubeconfig": kubeconfig, "settings": settings}


@cli.command()
@click.argument("namespace")
@click.pass_context
def change_namespace(ctx: click.Context, namespace: str):
    """Set the namespace of the current context"""
    _run_mutation(ctx, "try_set_namespace", namespace)


@cli.command()
@click.argument("context")
@click.pass_context
def change_context(ctx: click.Context, context: str):
    """Switch the current context"""
    _run_mutation(ctx, "try_switch_context", context)


@cli.command()
@click.argument("command")
@click.argument("prefix", default="")
@click.argument("last_full_word", default="")
@click.pass_context
def complete(ctx: click.Context, command: str, prefix: str, last_full_word: str):
    """Print completion candidates (called by the shell)"""
    settings = ctx.obj["settings"]
    try:
        store = _get_store(ctx)
        candidates = complete_candidates(
            last_full_word,
            prefix,
            store,
            lambda: list_namespaces(store.path, timeout=settings.namespace_timeout),
            settings=settings,
        )
    except KubeSwitchError as e:
        _fail(ctx, str(e), EXIT_IO)
    else:
        for candidate in candidates:
            click.echo(candidate)


@cli.command()
@click.pass_context
def completion(ctx: click.Context):
    """Print completion commands, add to your shell by executing `source <(kube-switch completion)`"""
    click.echo(render_completion_script(settings=ctx.obj["settings"]), nl=False)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == "__main__":
    main()
