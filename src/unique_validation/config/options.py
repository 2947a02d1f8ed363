from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.messages import DEFAULT_MESSAGE


class UniqueValidationOptions(BaseModel):
    """
    Plugin options.

    default_message: template used for fields without a custom unique message.
    Accepts `defaultMessage` as well; an empty value falls back to the default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    default_message: str = Field(default=DEFAULT_MESSAGE, alias="defaultMessage")

    @field_validator("default_message", mode="before")
    def fallback_to_default(cls, v: str | None) -> str:
        return v or DEFAULT_MESSAGE
