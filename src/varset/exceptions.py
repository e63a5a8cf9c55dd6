"""Custom exceptions for varset."""


class VarsetError(Exception):
    """Base exception class for varset."""
    pass


class GenomeDefinitionError(VarsetError):
    """Raised when chromosome names and lengths cannot form a genome."""
    pass


class LocusFormatError(VarsetError):
    """Raised when a locus string is not in 'chromosome:position' form."""
    pass


class MalformedLineError(VarsetError):
    """
    Raised when a variant line cannot be parsed.

    Attributes:
        line_number: 1-based line number in the source, or None if unknown.
        line: The offending text (without line terminator).
        reason: Short description of what was wrong.
    """

    def __init__(self, reason: str, line: str = "", line_number: int | None = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        snippet = self.line if len(self.line) <= 80 else self.line[:77] + "..."
        return f"{where}{self.reason} [{snippet}]"
