from __future__ import annotations

"""
Sync Run Domain Data Models.

Defines the result structure and factory functions used to communicate
execution results between the sync engine and the CLI layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shadersync.domain.models import CompileResult

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class JobReport:
    """
    Serializable view of one compile job outcome.

    Attributes:
        source_path: Shader source that was compiled.
        output_path: Artifact the compiler was asked to produce.
        command: Printable command line.
        ok: Whether the compiler succeeded.
        returncode: Compiler exit status, None if it never started.
        error: Failure description, empty on success.
    """
    source_path: str
    output_path: str
    command: str
    ok: bool
    returncode: Optional[int]
    error: str

    @classmethod
    def from_result(cls, result: CompileResult) -> JobReport:
        return cls(
            source_path=result.job.source_path,
            output_path=result.job.output_path,
            command=result.job.command,
            ok=result.ok,
            returncode=result.returncode,
            error=result.error,
        )


@dataclass(frozen=True)
class SyncResult:
    """
    Unified result object of a complete clean and build run.

    Attributes:
        ok: False if the run aborted or any compile job failed.
        error: Descriptive message in case of an aborted run.
        shader_dir: Normalized root directory processed.
        compiler: Compiler executable used for the jobs.
        artifact_suffix: Suffix identifying compiled artifacts.
        dry_run: Whether the run only simulated its side effects.
        deleted: Artifacts removed (or that would be removed) by the cleaner.
        launched: Number of compile jobs submitted.
        failed: Number of compile jobs that reported an error.
        jobs: Per-job outcome reports.
        planned: Sources that would be compiled in a dry run.
    """
    ok: bool
    error: str

    shader_dir: str
    compiler: str
    artifact_suffix: str
    dry_run: bool = False

    deleted: List[str] = field(default_factory=list)
    launched: int = 0
    failed: int = 0
    jobs: List[JobReport] = field(default_factory=list)
    planned: List[str] = field(default_factory=list)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        shader_dir: str,
        deleted: Optional[List[str]] = None,
        dry_run: bool = False,
) -> SyncResult:
    """
    Create a failed run result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        shader_dir: The target shader directory.
        deleted: Artifacts already removed before the failure.
        dry_run: Whether the run was a simulation.

    Returns:
        SyncResult: An immutable error result object.
    """
    return SyncResult(
        ok=False,
        error=error,
        shader_dir=shader_dir,
        compiler=cfg.get("compiler", ""),
        artifact_suffix=cfg.get("artifact_suffix", ""),
        dry_run=dry_run,
        deleted=deleted or [],
    )


def create_success_result(
        cfg: Dict[str, Any],
        shader_dir: str,
        deleted: List[str],
        results: Optional[List[CompileResult]] = None,
        planned: Optional[List[str]] = None,
        dry_run: bool = False,
) -> SyncResult:
    """
    Create a completed run result instance.

    The run is only reported as ok when every compile job succeeded.

    Args:
        cfg: Final configuration used during execution.
        shader_dir: Normalized shader directory.
        deleted: Artifacts removed by the cleaner.
        results: Outcomes of every finished compile job.
        planned: Sources that a dry run would have compiled.
        dry_run: Whether the run was a simulation.

    Returns:
        SyncResult: An immutable result object.
    """
    reports = [JobReport.from_result(r) for r in (results or [])]
    failed = sum(1 for r in reports if not r.ok)

    return SyncResult(
        ok=failed == 0,
        error="" if failed == 0 else f"{failed} shader(s) failed to compile.",
        shader_dir=shader_dir,
        compiler=cfg.get("compiler", ""),
        artifact_suffix=cfg.get("artifact_suffix", ""),
        dry_run=dry_run,
        deleted=list(deleted),
        launched=len(reports),
        failed=failed,
        jobs=reports,
        planned=list(planned or []),
    )
