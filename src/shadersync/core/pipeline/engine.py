from __future__ import annotations

"""
Core sync orchestration.

This module coordinates a complete run:
1. Validates configuration and the shader directory.
2. Deletes stale compiled artifacts.
3. Submits one compile job per source to a bounded worker pool.
4. Waits for every job and aggregates the outcomes.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from shadersync.core.pipeline.validator import validate_config
from shadersync.core.services.builder import build_shaders, iter_compile_jobs
from shadersync.core.services.cleaner import clean_artifacts
from shadersync.domain.pipeline_models import (
    SyncResult,
    create_error_result,
    create_success_result,
)
from shadersync.infra.fs import normalize_path

logger = logging.getLogger(__name__)


def run_sync(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        clean_only: bool = False,
) -> SyncResult:
    """
    Execute the clean and build workflow.

    Cleaning finishes completely before the first compile job is submitted.
    Jobs then run concurrently, bounded by 'max_workers', and complete in no
    particular order.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, report deletions and planned compiles without side effects.
        clean_only: If True, skip the build phase.

    Returns:
        SyncResult: Object containing status, deleted artifacts and job outcomes.
    """
    logger.debug("Sync run started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    shader_dir = normalize_path(cfg["shader_dir"], os.getcwd())
    if not os.path.isdir(shader_dir):
        msg = f"Invalid shader directory: {shader_dir}"
        logger.error(msg)
        return create_error_result(msg, cfg, shader_dir, dry_run=dry_run)

    suffix = cfg["artifact_suffix"]
    compiler = cfg["compiler"]

    # -------------------------------------------------------------------------
    # 2) Clean Phase
    # -------------------------------------------------------------------------
    deleted: List[str] = []
    if cfg["clean_first"] or clean_only:
        try:
            deleted = clean_artifacts(shader_dir, suffix, dry_run=dry_run)
        except OSError as e:
            msg = f"Cleaning aborted: {e}"
            logger.error(msg)
            return create_error_result(msg, cfg, shader_dir, dry_run=dry_run)
        logger.debug(f"Cleaner removed {len(deleted)} artifact(s).")

    if clean_only:
        return create_success_result(cfg, shader_dir, deleted, dry_run=dry_run)

    # -------------------------------------------------------------------------
    # 3) Build Phase
    # -------------------------------------------------------------------------
    if dry_run:
        try:
            removed = set(deleted)
            planned = [
                job.source_path
                for job in iter_compile_jobs(shader_dir, compiler, suffix)
                if job.source_path not in removed
            ]
        except OSError as e:
            msg = f"Build aborted: {e}"
            logger.error(msg)
            return create_error_result(msg, cfg, shader_dir, deleted, dry_run=True)
        return create_success_result(cfg, shader_dir, deleted, planned=planned, dry_run=True)

    max_workers = cfg["max_workers"] or None
    traversal_error: Optional[OSError] = None

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ShaderCompiler") as executor:
        futures = []
        try:
            futures = build_shaders(shader_dir, compiler, suffix, executor)
        except OSError as e:
            # Jobs submitted before the failure still run to completion
            traversal_error = e

    if traversal_error is not None:
        msg = f"Build aborted: {traversal_error}"
        logger.error(msg)
        return create_error_result(msg, cfg, shader_dir, deleted)

    results = [f.result() for f in futures]
    logger.debug(f"Builder finished {len(results)} job(s).")

    return create_success_result(cfg, shader_dir, deleted, results=results)
