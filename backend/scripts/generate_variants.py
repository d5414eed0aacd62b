#!/usr/bin/env python
"""
Compile printable rows, the answer key and answer-sheet assignments for an
evaluation exported as JSON.

Outputs are written to {output_dir}/{evaluation_id}/:
    variants.json     compiled rows, in printed order
    answer_key.csv    question x row table of correct letters
    assignments.csv   one line per student with its scan payload (with --roster)
"""

import json
import logging
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from variant_service.allocation import assignments_to_frame, load_roster_csv
from variant_service.answer_key import answer_key_table, write_answer_key_csv
from variant_service.core.data_models import Evaluation
from variant_service.core.validation import validate_row_count
from variant_service.print_run import (
    AnswerSheetRun,
    PrintConfig,
    PrintRun,
    apply_overrides,
    load_print_config,
    prepare_answer_sheets,
    prepare_print_run,
)

BACKEND_DIR = Path(__file__).parent.parent.absolute()
DEFAULT_OUTPUT_DIR = BACKEND_DIR / "reports" / "variants"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("generate_variants")

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def print_answer_key(title: str, key_table: pd.DataFrame) -> None:
    """Pretty-print the answer key as a rich Table."""
    table = Table(title=f"Answer key - {title}")
    table.add_column("Question", justify="right", style="bold")
    for column in key_table.columns:
        table.add_column(column, justify="center")

    for question, letters in key_table.iterrows():
        table.add_row(str(question), *[str(v) for v in letters])

    console.print(table)


@app.command()
def main(
    evaluation_path: Path = typer.Argument(
        ...,
        help="Path to the evaluation JSON export",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="YAML print configuration (seed, row_count, overrides)",
    ),
    seed: str | None = typer.Option(
        None,
        help="Seed keyword; defaults to the config seed or the evaluation id",
    ),
    rows: int | None = typer.Option(
        None,
        help="Number of rows to compile",
    ),
    roster: Path | None = typer.Option(
        None,
        help="Roster CSV (student_id, display_name, course_name)",
    ),
    output_dir: Path = typer.Option(
        DEFAULT_OUTPUT_DIR,
        help="Directory for generated files",
    ),
) -> None:
    """Compile rows and answer key for an evaluation."""
    evaluation = Evaluation.model_validate_json(evaluation_path.read_text())

    if rows is not None:
        validate_row_count(rows)

    if config_path is not None:
        config = load_print_config(config_path)
    else:
        config = PrintConfig(
            seed=seed or evaluation.id,
            row_count=rows if rows is not None else 1,
        )

    evaluation = apply_overrides(evaluation, config)
    run_seed = seed or config.seed
    row_count = rows if rows is not None else config.row_count

    run: PrintRun
    if roster is not None:
        students = load_roster_csv(roster)
        run = prepare_answer_sheets(evaluation, students, run_seed, row_count)
    else:
        run = prepare_print_run(evaluation, run_seed, row_count)

    target_dir = output_dir / evaluation.id
    target_dir.mkdir(parents=True, exist_ok=True)

    if isinstance(run, AnswerSheetRun):
        assignments_path = target_dir / "assignments.csv"
        assignments_to_frame(run.assignments).to_csv(
            assignments_path, index=False
        )
        logger.info(
            "Allocated %d students -> %s",
            len(run.assignments),
            assignments_path,
        )

    variants_path = target_dir / "variants.json"
    with open(variants_path, "w") as f:
        json.dump(
            [row.model_dump(mode="json") for row in run.rows], f, indent=2
        )

    key_path = target_dir / "answer_key.csv"
    write_answer_key_csv(run.answer_key, key_path)

    print_answer_key(evaluation.title, answer_key_table(run.answer_key))
    logger.info(
        "Compiled %d rows (total score %.1f) -> %s",
        run.row_count,
        run.total_score,
        target_dir,
    )


if __name__ == "__main__":
    app()
