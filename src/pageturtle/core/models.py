"""Data models for the compile and publish pipeline"""

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


DATE_FORMAT = '%Y-%m-%d'


class DocumentMetadata(BaseModel):
    """Front-matter fields of a single content document."""
    model_config = ConfigDict(extra='ignore')

    title:             str
    authors:           Optional[list[str]] = None
    slug:              Optional[str] = None
    description:       Optional[str] = None
    date:              dt.date
    tags:              list[str] = []
    table_of_contents: bool = False

    @field_validator('date', mode='before')
    @classmethod
    def _parse_date(cls, value):
        # YAML resolves unquoted dates itself; datetimes carry a time of day and are rejected
        if isinstance(value, dt.datetime):
            raise ValueError(f"expected a date in {DATE_FORMAT} format, got a datetime")
        if isinstance(value, dt.date):
            return value
        if not isinstance(value, str):
            raise ValueError(f"expected a date in {DATE_FORMAT} format")
        try:
            return dt.datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as e:
            raise ValueError(f"invalid date {value!r}: {e}") from e

    @field_validator('tags', mode='before')
    @classmethod
    def _none_tags(cls, value):
        return [] if value is None else value

    def format_date(self) -> str:
        """Human-readable date, e.g. 'January 5, 2024'."""
        return f"{self.date:%B} {self.date.day}, {self.date.year}"


@dataclass
class Heading:
    level:  int
    title:  str
    anchor: str


@dataclass
class TocEntry:
    """A heading and the entries nested under it."""
    heading:  Heading
    children: list['TocEntry'] = field(default_factory=list)

    @property
    def level(self) -> int:
        return self.heading.level

    @property
    def title(self) -> str:
        return self.heading.title

    @property
    def anchor(self) -> str:
        return self.heading.anchor


@dataclass(frozen=True)
class AssetReference:
    original_path: str     # as authored in the document
    final_path:    str     # site-relative, e.g. /img/photo.png


@dataclass
class CompiledDocument:
    """A parsed document with validated metadata and compile-time derived fields."""
    metadata:     DocumentMetadata
    raw_content:  str
    tree:         int              # handle into the build's ParseArena
    toc:          list[TocEntry]
    reading_time: int              # minutes, rounded up
    source_path:  Optional[Path] = None


@dataclass
class PublishableDocument:
    """A compiled document with resolved output identity and rendered HTML."""
    document:        CompiledDocument
    output_filename: str
    description:     str
    rendered_html:   str
    assets:          list[AssetReference] = field(default_factory=list)

    @property
    def metadata(self) -> DocumentMetadata:
        return self.document.metadata


class CompileError(Exception):
    """Per-document failure while compiling or publishing; positions are 1-based."""

    def __init__(self, message: str, line: int = 1, column: int = 1):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


@dataclass
class BuildFailure:
    path:  Path
    error: CompileError

    def __str__(self) -> str:
        return f"{self.path}:{self.error}"


@dataclass
class BuildReport:
    output_dir: Path
    published:  list[PublishableDocument] = field(default_factory=list)
    failures:   list[BuildFailure] = field(default_factory=list)
