"""
Core data models for varset.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from ..io.input import STDIN_NAMES


class LoadMode(str, Enum):
    """How a bulk load treats malformed lines."""
    STRICT = "strict"
    LENIENT = "lenient"


class SkippedLine(BaseModel):
    """A malformed line dropped during a lenient load."""
    line_number: int = Field(ge=1)
    reason: str
    text: str = ""


class LoadReport(BaseModel):
    """
    Summary of building a store from a text source.

    In strict mode a load either succeeds with no skipped lines or raises;
    in lenient mode the skipped lines are listed here.
    """
    mode: LoadMode = LoadMode.STRICT
    lines_read: int = 0
    header_lines: int = 0
    records_loaded: int = 0
    multi_base_filtered: int = 0
    skipped: list[SkippedLine] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def clean(self) -> bool:
        return not self.skipped

    def summary(self) -> str:
        text = (
            f"{self.records_loaded} records from {self.lines_read} lines "
            f"({self.multi_base_filtered} multi-base filtered, {self.skipped_count} malformed skipped)"
        )
        if self.skipped:
            first = self.skipped[0]
            text += f"; first skipped line {first.line_number}: {first.reason}"
        return text


class VarsetConfig(BaseModel):
    """
    Configuration for a varset pipeline run.
    """
    # Input
    variant_file: Path
    genome_file: Path  # FASTA or .fai index

    # Output
    output_file: Path | None = None

    # Loading
    keep_multi_base: bool = False
    load_mode: LoadMode = LoadMode.STRICT

    # Processing
    separate: bool = True
    max_linear_steps: int = Field(default=3, ge=0)
    threads: int = Field(default=1, ge=1)

    @field_validator("variant_file")
    @classmethod
    def validate_variant_file(cls, v: Path) -> Path:
        if str(v) in STDIN_NAMES:
            return v
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v

    @field_validator("genome_file")
    @classmethod
    def validate_genome_file(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"File not found: {v}")
        return v

    @field_validator("output_file")
    @classmethod
    def validate_output_file(cls, v: Path | None) -> Path | None:
        if v is not None and v.is_dir():
            raise ValueError(f"Output path must be a file, not a directory: {v}")
        return v

    @model_validator(mode="after")
    def validate_paths_differ(self) -> "VarsetConfig":
        if self.output_file is None or str(self.output_file) in STDIN_NAMES:
            return self
        if str(self.variant_file) not in STDIN_NAMES and self.output_file == self.variant_file:
            raise ValueError("Output file must differ from the input variant file")
        return self

    @property
    def lenient(self) -> bool:
        return self.load_mode == LoadMode.LENIENT
