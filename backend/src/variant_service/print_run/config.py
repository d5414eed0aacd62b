"""
Print run configuration loaded from YAML with OmegaConf.
"""

from dataclasses import dataclass
from pathlib import Path

from omegaconf import MISSING, OmegaConf

from variant_service.core.constants import MAX_ROWS, MIN_ROWS
from variant_service.core.data_models import Evaluation

PARAMS_DIR = Path(__file__).parent / "params"


@dataclass
class PrintConfig:
    """Options chosen in the print dialog.

    Attributes:
        seed: Keyword that makes every row reproducible. Reusing it
            reprints identical rows.
        row_count: Number of rows to compile.
        randomize_questions: Overrides the evaluation's flag when set.
        randomize_alternatives: Overrides the evaluation's flag when set.
    """

    seed: str = MISSING
    row_count: int = 1
    randomize_questions: bool | None = None
    randomize_alternatives: bool | None = None

    def __post_init__(self) -> None:
        if not (MIN_ROWS <= self.row_count <= MAX_ROWS):
            raise ValueError(
                f"row_count must be in [{MIN_ROWS}, {MAX_ROWS}], "
                f"got {self.row_count}"
            )


def load_print_config(yaml_path: Path) -> PrintConfig:
    """Load and validate a print configuration from YAML.

    Raises:
        FileNotFoundError: If yaml_path doesn't exist.
    """
    schema = OmegaConf.structured(PrintConfig)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    user_config = OmegaConf.load(yaml_path)
    config = OmegaConf.merge(schema, user_config)

    result = OmegaConf.to_object(config)
    assert isinstance(result, PrintConfig)
    return result


def get_preset(name: str) -> PrintConfig:
    """Get a bundled print configuration by name."""
    config_path = PARAMS_DIR / f"{name}.yaml"
    if not config_path.exists():
        available = sorted(x.stem for x in PARAMS_DIR.glob("*.yaml"))
        raise ValueError(f"Unknown preset: {name}. Available presets: {available}")
    return load_print_config(config_path)


def apply_overrides(evaluation: Evaluation, config: PrintConfig) -> Evaluation:
    """Return a copy of the evaluation with the config's flag overrides."""
    update: dict[str, bool] = {}
    if config.randomize_questions is not None:
        update["randomize_questions"] = config.randomize_questions
    if config.randomize_alternatives is not None:
        update["randomize_alternatives"] = config.randomize_alternatives
    if not update:
        return evaluation
    return evaluation.model_copy(update=update)
