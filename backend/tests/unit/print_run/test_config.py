from pathlib import Path

import pytest

from variant_service.core.data_models import (
    Alternative,
    ContentBlock,
    Evaluation,
    MultipleChoiceItem,
)
from variant_service.print_run import (
    PrintConfig,
    apply_overrides,
    get_preset,
    load_print_config,
)
from variant_service.print_run.config import PARAMS_DIR

########################################################
# Configuration loading
########################################################


def test_configuration_presets_load() -> None:
    """Make sure that all the preset configuration files load."""

    for config_path in PARAMS_DIR.glob("*.yaml"):
        if config_path.read_text().strip() == "":
            continue
        preset = load_print_config(config_path)
        assert preset is not None


def test_get_preset_two_rows() -> None:
    preset = get_preset("two_rows")
    assert preset.row_count == 2
    assert preset.seed == "nexus-2024"
    assert preset.randomize_questions is None


def test_get_preset_answer_sheets_overrides_flags() -> None:
    preset = get_preset("answer_sheets")
    assert preset.randomize_questions is True
    assert preset.randomize_alternatives is True


def test_get_preset_unknown_raises() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        get_preset("nonexistent_preset")


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_print_config(tmp_path / "nope.yaml")


def test_load_partial_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "print.yaml"
    path.write_text("seed: quiz-3\n")
    config = load_print_config(path)
    assert config.seed == "quiz-3"
    assert config.row_count == 1


def test_row_count_out_of_range() -> None:
    with pytest.raises(ValueError, match="row_count"):
        PrintConfig(seed="x", row_count=27)


########################################################
# Overrides
########################################################


def _evaluation() -> Evaluation:
    item = MultipleChoiceItem(
        id="q1",
        order=1,
        alternatives=[
            Alternative(id="a", text="A", is_correct=True, order=1),
            Alternative(id="b", text="B", order=2),
        ],
    )
    return Evaluation(
        id="ev1",
        title="Quiz",
        blocks=[ContentBlock(id="b1", order=1, items=[item])],
    )


def test_apply_overrides() -> None:
    evaluation = _evaluation()
    config = PrintConfig(seed="x", randomize_alternatives=True)
    updated = apply_overrides(evaluation, config)
    assert updated.randomize_alternatives is True
    assert updated.randomize_questions is False
    assert evaluation.randomize_alternatives is False


def test_apply_no_overrides_returns_same() -> None:
    evaluation = _evaluation()
    assert apply_overrides(evaluation, PrintConfig(seed="x")) is evaluation
