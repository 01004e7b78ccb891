"""CLI entrypoint for blueboxy — typer app with policies, categories and generate."""

import asyncio
import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console

from blueboxy.cli.composition import build_application
from blueboxy.cli.render import (
    cache_status_table,
    categories_table,
    policies_table,
    statistics_table,
)
from blueboxy.config.domain.config import ResilienceConfig
from blueboxy.config.infrastructure.observer import StructlogConfigObserver
from blueboxy.config.infrastructure.yaml_loader import YamlConfigLoader
from blueboxy.core.errors import BlueBoxyError
from blueboxy.messaging.application.service import MessagingService
from blueboxy.messaging.domain.message import (
    GeneratedMessage,
    MessageCategory,
    MessageCategoryType,
    MessageRequest,
)
from blueboxy.remote.domain.result import Failure, RemoteCallResult, Success
from blueboxy.retry.domain.policy import PRESETS, RetryPolicy

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _describe_failure(result: Failure) -> str:
    hint = " Try again." if result.retryable else ""
    return f"{result.kind.title}: {result.reason} [{result.attempts} attempt(s)]{hint}"


def _describe(result: RemoteCallResult[GeneratedMessage]) -> str:
    match result:
        case Success(value=message, attempts=attempts, from_cache=from_cache):
            origin = "cache" if from_cache else f"{attempts} attempt(s)"
            return f"{message.content}\n  [{origin}]"
        case Failure():
            return _describe_failure(result)


def _load_config(config_path: Path) -> ResilienceConfig:
    try:
        return YamlConfigLoader(observer=StructlogConfigObserver()).load(
            path=config_path
        )
    except BlueBoxyError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc


async def _generate_repeatedly(
    service: MessagingService, request: MessageRequest, repeat: int
) -> list[RemoteCallResult[GeneratedMessage]]:
    return [await service.generate_message(request) for _ in range(repeat)]


async def _load_categories(
    service: MessagingService, refresh: bool
) -> RemoteCallResult[list[MessageCategory]]:
    if refresh:
        return await service.refresh_categories()
    return await service.load_categories()


@app.command()
def policies(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config YAML whose policies to show"
    ),
    log_format: str = typer.Option(
        "console", "--log-format", help="Log format: 'console' or 'json'"
    ),
) -> None:
    """Show retry policies and their backoff schedules."""
    _configure_structlog(log_format=log_format)
    resolved: dict[str, RetryPolicy] = dict(PRESETS)
    if config_path is not None:
        config = _load_config(config_path)
        resolved = {
            name: policy
            for name in config.policy_names()
            if (policy := config.policy(name)) is not None
        }
    Console().print(policies_table(resolved))


@app.command()
def categories(
    config_path: Path = typer.Argument(..., help="Path to resilience config YAML"),
    refresh: bool = typer.Option(
        False, "--refresh", help="Bypass the cache and fetch a fresh list"
    ),
    log_format: str = typer.Option(
        "console", "--log-format", help="Log format: 'console' or 'json'"
    ),
) -> None:
    """List message categories through the cached retry executor."""
    _configure_structlog(log_format=log_format)
    config = _load_config(config_path)

    try:
        application = build_application(config=config)
        result = asyncio.run(
            _load_categories(service=application.messaging, refresh=refresh)
        )
        if isinstance(result, Success):
            Console().print(categories_table(result.value))
        else:
            typer.echo(_describe_failure(result))

    except KeyboardInterrupt:
        typer.echo("Category fetch interrupted.")
        sys.exit(1)
    except BlueBoxyError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)

    if isinstance(result, Failure):
        raise typer.Exit(code=1)


@app.command()
def generate(
    config_path: Path = typer.Argument(..., help="Path to resilience config YAML"),
    category: MessageCategoryType = typer.Option(
        MessageCategoryType.DAILY_CHECKINS, "--category", help="Message category"
    ),
    prompt: str = typer.Option(..., "--prompt", "-p", help="Prompt sent to the model"),
    partner_name: str | None = typer.Option(
        None, "--partner-name", help="Name of the person the message is for"
    ),
    tone: str | None = typer.Option(None, "--tone", help="Tone of the message"),
    repeat: int = typer.Option(
        1, "--repeat", "-n", min=1, help="Number of identical requests to issue"
    ),
    log_format: str = typer.Option(
        "console", "--log-format", help="Log format: 'console' or 'json'"
    ),
) -> None:
    """Generate a message through the cached retry executor."""
    _configure_structlog(log_format=log_format)
    config = _load_config(config_path)

    try:
        application = build_application(config=config)
        request = MessageRequest(
            category=category, prompt=prompt, partner_name=partner_name, tone=tone
        )
        results = asyncio.run(
            _generate_repeatedly(
                service=application.messaging, request=request, repeat=repeat
            )
        )

        for result in results:
            typer.echo(_describe(result))

        console = Console()
        console.print(statistics_table(application.statistics.all_stats))
        console.print(cache_status_table(application.executor.status()))

    except KeyboardInterrupt:
        typer.echo("Generation interrupted.")
        sys.exit(1)
    except BlueBoxyError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)

    if any(isinstance(result, Failure) for result in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
