"""
Result models returned by the writer and the regeneration entry points
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class WriteResult:
    """
    Outcome of one protected write

    Attributes:
        target: File that now holds the rendered text
        backup: Previous version of the target, if there was one
        bytesWritten: Size of the rendered text as written
        verified: Whether the new content was compared against the backup
    """
    target: Path
    backup: Optional[Path] = field(default=None)
    bytesWritten: int = field(default=0)
    verified: bool = field(default=False)


@dataclass
class RegenerateResult:
    """
    Outcome of regenerating one document

    Attributes:
        source: Document that was parsed
        output: File that was written
        componentCount: Number of components in the document
        scriptCount: Number of script blocks executed
        write: Details of the protected write
    """
    source: Path
    output: Path
    componentCount: int = field(default=0)
    scriptCount: int = field(default=0)
    write: Optional[WriteResult] = field(default=None)
