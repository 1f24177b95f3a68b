"""Schema for a batch question-answering request."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class BatchRequest(BaseModel):
    """A document URL plus the questions to answer about it.

    The questions list must be non-empty and every entry must be a string with
    visible characters.
    """

    model_config = ConfigDict(extra="ignore")

    documents: StrictStr = Field(
        ...,
        min_length=1,
        description="URL of the document to answer questions about",
        json_schema_extra={"example": "https://example.com/policy.pdf"},
    )
    questions: list[StrictStr] = Field(
        ...,
        min_length=1,
        description="Questions to answer, in the order answers should be returned",
        json_schema_extra={"example": ["What is the grace period for premium payment?"]},
    )

    @field_validator("documents")
    @classmethod
    def documents_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("documents must be a non-empty URL")
        return value

    @field_validator("questions")
    @classmethod
    def questions_not_blank(cls, value: list[str]) -> list[str]:
        blank = [i for i, question in enumerate(value) if not question.strip()]
        if blank:
            raise ValueError(f"questions at positions {blank} are empty")
        return value
