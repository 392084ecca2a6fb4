"""Tool argument models using Pydantic for validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_LIMIT = 25
MAX_LIMIT = 100


class GetCurrentPlaylistInput(BaseModel):
    """Arguments for get_current_playlist (none)."""

    model_config = ConfigDict(extra="ignore")


class SearchPlaylistInput(BaseModel):
    """Arguments for search_playlist_by_date."""

    model_config = ConfigDict(extra="ignore")

    date: str = Field(
        min_length=1,
        description='ISO 8601 date string (e.g., "2024-12-15") or date range "2024-12-01 to 2024-12-31"',
    )
    artist_filter: Optional[str] = Field(
        default=None,
        description="Filter results by artist name (case-insensitive substring match)",
    )
    limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        strict=True,
        description="Maximum number of songs to return (default: 25, max: 100)",
    )


def format_validation_error(error: ValidationError) -> str:
    """Itemize a ValidationError per offending field.

    Returns:
        e.g. "Input validation failed: limit: Input should be less than or equal to 100"
    """
    details = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "arguments"
        details.append(f"{field}: {item['msg']}")
    return f"Input validation failed: {', '.join(details)}"
