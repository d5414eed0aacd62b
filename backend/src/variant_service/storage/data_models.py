from datetime import datetime

from pydantic import BaseModel, ConfigDict

from variant_service.answer_key.data_models import AnswerKey


class FrozenAnswerKey(BaseModel):
    """
    Answer key captured when a print run is confirmed.

    Grading reads this instead of recomputing from canonical data, which
    may have been edited after the sheets were handed out.
    """

    model_config = ConfigDict(frozen=True)

    evaluation_id: str
    seed: str
    row_count: int
    answer_key: AnswerKey
    created_at: datetime
