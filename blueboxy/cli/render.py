"""Rich tables for the CLI."""

from rich.table import Table

from blueboxy.cache.domain.status import CacheStatus
from blueboxy.messaging.domain.message import MessageCategory
from blueboxy.remote.infrastructure.statistics_observer import OperationStats
from blueboxy.retry.domain.policy import RetryPolicy


def _seconds(value: float) -> str:
    return f"{value:.2f}s"


def policies_table(policies: dict[str, RetryPolicy]) -> Table:
    table = Table(title="Retry policies")
    table.add_column("Policy", style="cyan")
    table.add_column("Attempts", justify="right")
    table.add_column("Delays")
    table.add_column("Cap", justify="right")
    table.add_column("Jitter", justify="right")
    table.add_column("Retries on")
    for name in sorted(policies):
        policy = policies[name]
        delays = " → ".join(_seconds(d) for d in policy.schedule()) or "—"
        kinds = ", ".join(sorted(str(k) for k in policy.retryable_kinds)) or "—"
        table.add_row(
            name,
            str(policy.max_attempts),
            delays,
            _seconds(policy.max_delay_seconds),
            f"±{policy.jitter_fraction:.0%}",
            kinds,
        )
    return table


def statistics_table(stats: dict[str, OperationStats]) -> Table:
    table = Table(title="Retry statistics")
    table.add_column("Operation", style="cyan")
    table.add_column("Requests", justify="right")
    table.add_column("Cache hits", justify="right")
    table.add_column("First try", justify="right")
    table.add_column("Success rate", justify="right")
    table.add_column("Avg attempts", justify="right")
    table.add_column("Errors")
    for operation in sorted(stats):
        s = stats[operation]
        errors = ", ".join(f"{kind}×{n}" for kind, n in sorted(s.error_counts.items()))
        table.add_row(
            operation,
            str(s.total_requests),
            str(s.cache_hits),
            str(s.first_attempt_successes),
            f"{s.success_rate:.0%}",
            f"{s.average_attempts:.2f}",
            errors or "—",
        )
    return table


def cache_status_table(status: CacheStatus) -> Table:
    table = Table(title="Cache health", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Entries", str(status.total_entries))
    table.add_row("Valid", str(status.valid_entries))
    table.add_row("Expired", str(status.expired_entries))
    table.add_row("Approx. size", f"{status.approximate_size_bytes / 1024:.1f} KB")
    return table


def categories_table(categories: list[MessageCategory]) -> Table:
    table = Table(title="Message categories")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Description")
    for category in categories:
        table.add_row(str(category.id), category.name, category.description)
    return table
