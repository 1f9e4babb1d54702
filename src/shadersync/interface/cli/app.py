from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and merging
of configuration sources (defaults, persistent storage, and CLI overrides),
sync execution, and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from shadersync.core.pipeline.engine import run_sync
from shadersync.core.pipeline.validator import validate_config
from shadersync.domain.config import get_default_config, load_config, save_config
from shadersync.domain.pipeline_models import SyncResult
from shadersync.infra.fs import normalize_path
from shadersync.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from shadersync.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    """Resolve configuration, execute the run and render its summary."""
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 1. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 2. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    clean_conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    clean_conf["shader_dir"] = normalize_path(clean_conf["shader_dir"], os.getcwd())

    if args.save_config:
        save_config(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 3. Pre-flight input verification
    shader_dir = clean_conf["shader_dir"]
    if not os.path.isdir(shader_dir):
        logger.error(f"Shader directory does not exist: {shader_dir}")
        return 2

    # 4. Execution phase
    logger.debug(f"Targeting shader directory: {shader_dir}")
    try:
        result = run_sync(clean_conf, dry_run=bool(args.dry_run), clean_only=bool(args.clean_only))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130
    except Exception as e:
        logger.critical(f"Sync failed: {e}", exc_info=True)
        return 1

    # 5. Output rendering phase
    shutdown_logging()
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a concrete value are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in ("shader_dir", "compiler", "artifact_suffix", "max_workers", "clean_first"):
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: SyncResult) -> None:
    """
    Format and print the run result to the standard output.

    Args:
        result: The sync result to render.
    """
    if result.dry_run:
        print("DRY RUN: nothing was deleted or compiled.")
        for path in result.deleted:
            print(f"  - would delete: {path}")
        for path in result.planned:
            print(f"  - would compile: {path}")
        return

    if not result.ok and not result.jobs:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(f"Shader directory: {result.shader_dir}")
    print(f"Artifacts deleted: {len(result.deleted)}")
    print(f"Shaders compiled: {result.launched - result.failed}/{result.launched}")

    if result.failed:
        print(f"ERROR: {result.error}", file=sys.stderr)
        for job in result.jobs:
            if not job.ok:
                print(f"  - {job.source_path}", file=sys.stderr)


# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
