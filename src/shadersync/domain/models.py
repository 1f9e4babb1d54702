from __future__ import annotations

"""
Compilation Domain Data Models.

Defines the Data Transfer Objects (DTOs) exchanged between the traversal
services: one directory level, one compile job and the outcome of that job.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryListing:
    """
    Immediate contents of a single directory level.

    Attributes:
        files: Bare file names found in the directory.
        subdirs: Absolute paths of the immediate subdirectories.
    """
    files: List[str] = field(default_factory=list)
    subdirs: List[str] = field(default_factory=list)

# -----------------------------------------------------------------------------
# COMPILATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompileJob:
    """
    One invocation of the external compiler against one source file.

    Attributes:
        compiler: Path or name of the compiler executable.
        source_path: Absolute path of the shader source.
        output_path: Destination of the compiled artifact.
    """
    compiler: str
    source_path: str
    output_path: str

    @classmethod
    def for_source(cls, compiler: str, source_path: str, suffix: str) -> CompileJob:
        """Build a job whose output sits beside the source with the suffix appended."""
        return cls(compiler=compiler, source_path=source_path, output_path=f"{source_path}{suffix}")

    @property
    def argv(self) -> List[str]:
        return [self.compiler, self.source_path, "-o", self.output_path]

    @property
    def command(self) -> str:
        """Printable form of the invocation."""
        return f'"{self.compiler}" "{self.source_path}" -o "{self.output_path}"'


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of a finished compile job.

    Attributes:
        job: The job that was executed.
        returncode: Exit status of the compiler, None if it never started.
        error: Failure description; empty when the compile succeeded.
    """
    job: CompileJob
    returncode: Optional[int] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error
