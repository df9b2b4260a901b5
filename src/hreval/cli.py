"""Typer CLI for inspecting evaluation plans, transitions and scores."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import pendulum
import typer

from .config import ConfigManager
from .container import EvaluationContainer, create_container
from .core import ValidationError, is_terminal, parse_status, selectable_statuses
from .logging import configure_logging
from .schemas.config import load_config

app = typer.Typer(help="Performance evaluation engine CLI.")


@app.command()
def plan(
    schedule: str = typer.Option("Quarterly", "--type", help="Quarterly, Annual or Optional."),
    year: int = typer.Option(..., help="Evaluation year."),
    quarter: Optional[int] = typer.Option(None, help="Quarter for Optional reviews."),
    reviewer: str = typer.Option("", help="Reviewer id from the configured roster."),
    date: Optional[str] = typer.Option(None, help="Review date (ISO); defaults to today."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the Draft records a create request would generate."""
    container = _bootstrap(config, log_level)
    generator = container.record_generator()
    try:
        records = generator.generate(
            {
                "type": schedule,
                "year": year,
                "quarter": quarter,
                "reviewer_id": reviewer,
                "date": date,
            }
        )
    except ValidationError as exc:
        _fail(exc.errors)
    _emit([record.model_dump(mode="json") for record in records])


@app.command()
def transitions(
    status: str = typer.Option(..., help="Current status (label or REST code)."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print the statuses an evaluation may move to next."""
    configure_logging(log_level)
    try:
        current = parse_status(status)
    except ValidationError as exc:
        _fail(exc.errors)
    _emit(
        {
            "status": current.value,
            "selectable": [option.value for option in selectable_statuses(current)],
            "terminal": is_terminal(current),
        }
    )


@app.command()
def score(
    input_path: Path = typer.Option(
        ..., "--input", exists=True, readable=True, dir_okay=False, help="JSON with objectives/competencies."
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Validate objective/competency drafts and print composite scores."""
    container = _bootstrap(config, log_level)
    engine = container.engine()
    try:
        document = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON: {exc}", param_name="input") from exc
    if not isinstance(document, dict):
        raise typer.BadParameter("Input must be a JSON object", param_name="input")

    evaluation = document.get("evaluation") or {
        "id": "preview",
        "type": "Preview",
        "period": "-",
        "date": pendulum.now().to_date_string(),
    }
    try:
        aggregate = engine.open(evaluation)
    except ValidationError as exc:
        _fail({f"evaluation.{key}": message for key, message in exc.errors.items()})

    errors: dict[str, str] = {}
    for index, draft in enumerate(document.get("objectives") or []):
        try:
            engine.add_objective(aggregate, draft)
        except ValidationError as exc:
            errors.update({f"objectives[{index}].{key}": msg for key, msg in exc.errors.items()})
    for index, draft in enumerate(document.get("competencies") or []):
        try:
            engine.add_competency(aggregate, draft)
        except ValidationError as exc:
            errors.update({f"competencies[{index}].{key}": msg for key, msg in exc.errors.items()})
    if errors:
        _fail(errors)

    _emit(
        {
            "evaluation_id": aggregate.id,
            "objectives": engine.overall_objective_score(aggregate),
            "competencies": engine.overall_competency_score(aggregate),
            "objective_count": len(aggregate.objectives),
            "competency_count": len(aggregate.competencies),
        }
    )


def _bootstrap(config: Path | None, log_level: str) -> EvaluationContainer:
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_config(ConfigManager.read(config)).to_settings()
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_name="config") from exc

    configure_logging(log_level)
    return create_container(settings=settings)


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _fail(errors: dict[str, str]) -> NoReturn:
    typer.echo(json.dumps({"errors": errors}, ensure_ascii=False, indent=2), err=True)
    raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
