"""
Data structures for row allocation.

The scan payload format is a wire contract read positionally by the
scanning process: "{evaluation_id}|{student_id}|{row_label}". It must not
change shape without a migration.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from variant_service.core.constants import (
    SCAN_PAYLOAD_DELIMITER,
    SCAN_PAYLOAD_FIELDS,
)
from variant_service.core.exceptions import ScanPayloadError
from variant_service.core.utils import is_row_label


class ScanPayload(BaseModel):
    """Identifies whose sheet this is and which row's key applies."""

    model_config = ConfigDict(frozen=True)

    evaluation_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    row_label: str

    @field_validator("evaluation_id", "student_id")
    @classmethod
    def no_delimiter(cls, value: str) -> str:
        if SCAN_PAYLOAD_DELIMITER in value:
            raise ValueError(
                f"must not contain '{SCAN_PAYLOAD_DELIMITER}', got '{value}'"
            )
        return value

    @field_validator("row_label")
    @classmethod
    def valid_row_label(cls, value: str) -> str:
        if not is_row_label(value):
            raise ValueError(f"invalid row label '{value}'")
        return value

    def encode(self) -> str:
        return SCAN_PAYLOAD_DELIMITER.join(
            [self.evaluation_id, self.student_id, self.row_label]
        )

    @classmethod
    def parse(cls, raw: str) -> "ScanPayload":
        """
        Parse a payload read from a printed sheet.

        Only line terminators are stripped; spaces belong to the ids.

        Raises:
            ScanPayloadError: If the payload does not have exactly three
                non-empty fields or the row label is invalid.
        """
        parts = raw.strip("\r\n").split(SCAN_PAYLOAD_DELIMITER)
        if len(parts) != SCAN_PAYLOAD_FIELDS or not all(parts):
            raise ScanPayloadError(f"Malformed scan payload: '{raw}'")
        evaluation_id, student_id, label = parts
        if not is_row_label(label):
            raise ScanPayloadError(
                f"Invalid row label '{label}' in scan payload '{raw}'"
            )
        return cls(
            evaluation_id=evaluation_id, student_id=student_id, row_label=label
        )

    def require_evaluation(self, evaluation_id: str) -> None:
        """Reject a sheet printed for another evaluation."""
        if self.evaluation_id != evaluation_id:
            raise ScanPayloadError(
                f"Sheet belongs to evaluation {self.evaluation_id}, "
                f"not {evaluation_id}"
            )


class StudentRowAssignment(BaseModel):
    """
    Durable record of which row a student received.

    Together with the canonical evaluation, (seed, row_label) is enough to
    rebuild the exact row at grading time.
    """

    model_config = ConfigDict(frozen=True)

    student_id: str
    evaluation_id: str
    row_label: str
    seed: str

    @property
    def payload(self) -> ScanPayload:
        return ScanPayload(
            evaluation_id=self.evaluation_id,
            student_id=self.student_id,
            row_label=self.row_label,
        )

    @property
    def scan_payload(self) -> str:
        return self.payload.encode()

    @model_validator(mode="after")
    def printable_payload(self) -> "StudentRowAssignment":
        """Reject records whose scan payload could not be printed."""
        for name in ("evaluation_id", "student_id"):
            value = getattr(self, name)
            if not value or SCAN_PAYLOAD_DELIMITER in value:
                raise ScanPayloadError(
                    f"{name} '{value}' cannot be encoded in a scan payload"
                )
        if not is_row_label(self.row_label):
            raise ScanPayloadError(f"Invalid row label '{self.row_label}'")
        return self
