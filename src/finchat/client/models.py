from pydantic import BaseModel, ConfigDict, Field


class AnalystRequest(BaseModel):
    """Request body sent to the financial-analysis service."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(description="The user's question")
    chat_history: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Earlier turns as ordered (role, text) pairs"
    )


class AnalystResponse(BaseModel):
    """Response body returned by the financial-analysis service."""

    model_config = ConfigDict(frozen=True)

    text_response: str = Field(
        default="",
        description="Markdown answer text"
    )
    chart_image: str | None = Field(
        default=None,
        description="Optional base64-encoded PNG chart"
    )
