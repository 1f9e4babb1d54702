from __future__ import annotations

"""
Shader Compilation Service.

Walks a shader tree and hands every file to the external compiler. Jobs are
submitted to an executor without waiting, so traversal never blocks on a
compile; each job reports its own outcome through a completion callback.
"""

import functools
import logging
import os
import subprocess
from concurrent.futures import Executor, Future
from typing import List

from shadersync.domain.models import CompileJob, CompileResult
from shadersync.infra.fs import list_directory

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_shaders(
        root: str,
        compiler: str,
        suffix: str,
        executor: Executor,
) -> List[Future[CompileResult]]:
    """
    Recursively submit one compile job per file found below the root.

    Every regular file is treated as a shader source; there is no extension
    filtering. The output of each job is written beside its source with the
    suffix appended. Completion order is not defined.

    Args:
        root: Shader directory to traverse.
        compiler: Compiler executable.
        suffix: Artifact suffix appended to each source path.
        executor: Pool the jobs are submitted to.

    Returns:
        List[Future[CompileResult]]: One future per submitted job.

    Raises:
        OSError: If a directory cannot be read.
    """
    futures: List[Future[CompileResult]] = []

    for job in iter_compile_jobs(root, compiler, suffix):
        future = executor.submit(run_compile_job, job)
        future.add_done_callback(functools.partial(_log_completion, job))
        futures.append(future)

    return futures


def iter_compile_jobs(root: str, compiler: str, suffix: str):
    """
    Yield the compile jobs for a tree, files of a directory before its subdirectories.

    Listing happens lazily, one directory at a time.
    """
    listing = list_directory(root)

    for name in listing.files:
        yield CompileJob.for_source(compiler, os.path.join(root, name), suffix)

    for subdir in listing.subdirs:
        yield from iter_compile_jobs(subdir, compiler, suffix)


def run_compile_job(job: CompileJob) -> CompileResult:
    """
    Run the compiler for a single job and capture its outcome.

    Launch failures, invalid arguments and non-zero exits are returned as a
    failed result rather than raised, so one bad shader never stops the others.

    Args:
        job: The job to execute.

    Returns:
        CompileResult: Exit status and error description.
    """
    try:
        proc = subprocess.run(
            job.argv,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except Exception as e:
        return CompileResult(job=job, returncode=None, error=f"Command failed: {job.command}\n{e}")

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        return CompileResult(
            job=job,
            returncode=proc.returncode,
            error=f"Command failed: {job.command}\n{details}".rstrip(),
        )

    return CompileResult(job=job, returncode=proc.returncode)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _log_completion(job: CompileJob, future: Future[CompileResult]) -> None:
    """Echo the command of a finished job, then its error if it failed."""
    if future.cancelled():
        return

    logger.info(job.command)

    exc = future.exception()
    if exc is not None:
        logger.error(f"Command failed: {job.command}\n{exc}")
        return

    result = future.result()
    if not result.ok:
        logger.error(result.error)
