"""
Stock board recommender: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Build the engine and score a snapshot.
  5. Report result to stdout.

Install and run::

    pip install -e .
    stockboard-recommender --help
    stockboard-recommender validate-config
    stockboard-recommender recommend --snapshot data/snapshot.json --user u1
    stockboard-recommender recommend --snapshot data/snapshot.json --type trending
    stockboard-recommender similar --snapshot data/snapshot.json --item p1
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stockboard-recommender",
    help="Stock board recommendation engine: local scoring CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from stockboard_recommender.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stockboard_recommender.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_snapshot_or_exit(snapshot_path: str):
    """Load an EngineSnapshot, exiting with code 1 on any load failure."""
    from stockboard_recommender.ingestion.snapshot import load_snapshot

    try:
        return load_snapshot(Path(snapshot_path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        # pydantic.ValidationError and json.JSONDecodeError are ValueErrors
        typer.echo(f"[ERROR] Invalid snapshot: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    rec = config.recommender

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Popularity cap:       {rec.popularity_cap}")
    typer.echo(f"  Content weight:       {rec.content_weight}")
    typer.echo(f"  Collaborative weight: {rec.collaborative_weight}")
    typer.echo(f"  Renormalize fusion:   {rec.renormalize}")
    typer.echo(f"  Trending window (h):  {config.trending.time_window_hours}")
    typer.echo(f"  Log level:            {config.logging.level}")
    typer.echo(f"  Debug mode:           {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))


@app.command("recommend")
def recommend(
    snapshot_path: str = typer.Option(
        ...,
        "--snapshot",
        help="Path to a JSON snapshot of users, items and instruments.",
    ),
    rec_type: str = typer.Option(
        "posts",
        "--type",
        help="Recommendation type: posts, trending, or stocks.",
    ),
    user_id: Optional[str] = typer.Option(
        None,
        "--user",
        help="Target user ID (required for posts and stocks).",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Maximum results (default from config).",
    ),
    content_weight: Optional[float] = typer.Option(
        None,
        "--content-weight",
        help="Override the content-based weight (posts only).",
    ),
    collaborative_weight: Optional[float] = typer.Option(
        None,
        "--collaborative-weight",
        help="Override the collaborative weight (posts only).",
    ),
    window_hours: Optional[float] = typer.Option(
        None,
        "--window-hours",
        help="Override the trending window in hours (trending only).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the JSON response payload instead of a table.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        help="Also write the JSON response payload to this file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank posts or stocks for a user, or list trending posts."""
    from stockboard_recommender.recommendations.dispatch import (
        RecommendationType,
        UnknownRecommendationTypeError,
        dispatch,
        effective_limit,
        parse_recommendation_type,
    )
    from stockboard_recommender.recommendations.engine import RecommendationEngine
    from stockboard_recommender.reporting.export import build_response_payload, export_to_json
    from stockboard_recommender.reporting.formatters import format_recommendation_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        parsed_type = parse_recommendation_type(rec_type)
    except UnknownRecommendationTypeError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    snapshot = _load_snapshot_or_exit(snapshot_path)
    engine = RecommendationEngine.from_config(config)

    user = None
    if parsed_type is not RecommendationType.TRENDING:
        if not user_id:
            typer.echo(f"[ERROR] --user is required for type '{parsed_type}'.", err=True)
            raise typer.Exit(code=1)
        user = snapshot.find_user(user_id)
        if user is None:
            typer.echo(f"[ERROR] Unknown user '{user_id}'.", err=True)
            raise typer.Exit(code=1)

    try:
        scores = dispatch(
            engine,
            parsed_type,
            user,
            snapshot.users,
            snapshot.items,
            snapshot.instruments,
            limit=limit,
            content_weight=content_weight,
            collaborative_weight=collaborative_weight,
            time_window_hours=window_hours,
        )
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    payload = build_response_payload(
        parsed_type, effective_limit(engine, parsed_type, limit), scores
    )

    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        typer.echo(format_recommendation_table(scores, str(parsed_type), user_id))

    if output:
        written = export_to_json(payload, Path(output))
        typer.echo(f"[OK] Wrote {written}")


@app.command("similar")
def similar(
    snapshot_path: str = typer.Option(
        ...,
        "--snapshot",
        help="Path to a JSON snapshot of users, items and instruments.",
    ),
    item_id: str = typer.Option(
        ...,
        "--item",
        help="ID of the post to find similar posts for.",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        help="Maximum results (default from config).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List posts most similar to a given post."""
    from stockboard_recommender.recommendations.engine import RecommendationEngine
    from stockboard_recommender.reporting.formatters import format_recommendation_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _load_snapshot_or_exit(snapshot_path)
    target = snapshot.find_item(item_id)
    if target is None:
        typer.echo(f"[ERROR] Unknown item '{item_id}'.", err=True)
        raise typer.Exit(code=1)

    engine = RecommendationEngine.from_config(config)
    try:
        scores = engine.recommend_similar_items(target, snapshot.items, limit)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_recommendation_table(scores, f"similar to {item_id}"))


if __name__ == "__main__":
    app()
