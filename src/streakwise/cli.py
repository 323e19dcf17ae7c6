"""Command line entry point for Streakwise."""

from __future__ import annotations

import json
from datetime import date, datetime

import click

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories.habit import SQLModelHabitRepository
from .logging_config import setup_logging
from .services.calendar import DateWindow
from .services.habits import (
    HabitNotFound,
    habit_analytics,
    habit_heatmap,
    log_completion,
    refresh_streaks,
    user_analytics,
)
from .services.windows import PERIODS, TIME_RANGES, resolve_period, resolve_time_range, today_in


class _DateParam(click.ParamType):
    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value)
        except ValueError:
            self.fail(f"{value!r} is not a YYYY-MM-DD date", param, ctx)


DATE = _DateParam()


class _DateTimeParam(click.ParamType):
    name = "datetime"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 timestamp", param, ctx)


DATETIME = _DateTimeParam()


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Habit streak and completion analytics."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


def _repository(config: BaseConfig) -> SQLModelHabitRepository:
    _, session_factory = bootstrap_database(config)
    return SQLModelHabitRepository(session_factory)


def _reference_day(config: BaseConfig, today: date | None) -> date:
    return today or today_in(config.tzinfo())


@cli.command("init-db")
@click.pass_obj
def init_db(config: BaseConfig) -> None:
    """Create the database schema."""

    bootstrap_database(config)
    click.echo(f"Database ready: {config.DATABASE_URL}")


@cli.command("analytics")
@click.argument("habit_id", type=int)
@click.option("--user-id", type=int, required=True)
@click.option("--today", type=DATE, default=None, help="Reference day (defaults to today in the configured zone)")
@click.option("--from", "window_from", type=DATE, default=None)
@click.option("--to", "window_to", type=DATE, default=None)
@click.option("--bucket-days", type=click.IntRange(min=1), default=1, show_default=True)
@click.pass_obj
def analytics(config: BaseConfig, habit_id, user_id, today, window_from, window_to, bucket_days) -> None:
    """Print streaks, completion rate and trend for one habit."""

    if (window_from is None) != (window_to is None):
        raise click.UsageError("--from and --to must be given together")
    reference = _reference_day(config, today)
    try:
        window = DateWindow(window_from, window_to) if window_from else None
        result = habit_analytics(
            _repository(config),
            habit_id,
            user_id=user_id,
            today=reference,
            window=window,
            bucket_days=bucket_days,
            trend_days=config.TREND_DAYS,
        )
    except (ValueError, HabitNotFound) as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(result.to_dict())


@cli.command("rates")
@click.option("--user-id", type=int, required=True)
@click.option("--range", "time_range", type=click.Choice(TIME_RANGES), default=None)
@click.option("--today", type=DATE, default=None)
@click.pass_obj
def rates(config: BaseConfig, user_id, time_range, today) -> None:
    """Print completion rate by habit and the combined daily trend."""

    reference = _reference_day(config, today)
    window = resolve_time_range(time_range or config.TIME_RANGE, reference)
    try:
        report = user_analytics(_repository(config), user_id=user_id, today=reference, window=window)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(
        {
            "from": window.start.isoformat(),
            "to": window.end.isoformat(),
            "rates": [
                {"habitId": r.habit_id, "habitName": r.habit_name, "completionRate": r.completion_rate}
                for r in report.rates
            ],
            "trend": [
                {"date": p.day.isoformat(), "completionRate": p.completion_rate} for p in report.trend
            ],
        }
    )


@cli.command("refresh-streaks")
@click.argument("habit_id", type=int)
@click.option("--user-id", type=int, required=True)
@click.option("--today", type=DATE, default=None)
@click.pass_obj
def refresh(config: BaseConfig, habit_id, user_id, today) -> None:
    """Recompute and store the cached streak columns for a habit."""

    reference = _reference_day(config, today)
    try:
        result = refresh_streaks(_repository(config), habit_id, user_id=user_id, today=reference)
    except (ValueError, HabitNotFound) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Habit {habit_id}: current streak {result.current_streak}, longest {result.longest_streak}")


@cli.command("heatmap")
@click.option("--user-id", type=int, required=True)
@click.option("--period", type=click.Choice(PERIODS), default="1month", show_default=True)
@click.option("--today", type=DATE, default=None)
@click.pass_obj
def heatmap(config: BaseConfig, user_id, period, today) -> None:
    """Print completed and due habit counts for each day of a look-back period."""

    reference = _reference_day(config, today)
    window = resolve_period(period, reference)
    try:
        cells = habit_heatmap(_repository(config), user_id=user_id, today=reference, window=window)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(
        [
            {
                "date": c.day.isoformat(),
                "completed": c.completed_count,
                "due": c.due_count,
                "completionRate": c.rate,
            }
            for c in cells
        ]
    )


@cli.command("log")
@click.argument("habit_id", type=int)
@click.option("--user-id", type=int, required=True)
@click.option("--at", "moment", type=DATETIME, default=None, help="When it happened (defaults to now); naive times are in the configured zone")
@click.option("--missed", is_flag=True, help="Record the day as missed instead of completed")
@click.pass_obj
def log(config: BaseConfig, habit_id, user_id, moment, missed) -> None:
    """Record a completion for the day a timestamp falls on."""

    zone = config.tzinfo()
    if moment is None:
        moment = datetime.now(zone)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=zone)
    try:
        row = log_completion(
            _repository(config), habit_id, user_id=user_id, at=moment, zone=zone, completed=not missed
        )
    except (ValueError, HabitNotFound) as exc:
        raise click.ClickException(str(exc)) from exc
    outcome = "completed" if row.completed else "missed"
    click.echo(f"Habit {habit_id}: {row.day.isoformat()} {outcome}")


def main() -> None:  # pragma: no cover - console script
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
