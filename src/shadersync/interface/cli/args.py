from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the shadersync CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="shadersync",
        description="Delete stale SPIR-V artifacts and recompile every shader below a directory.",
    )

    # --- Path Management ---
    p.add_argument(
        "-d", "--shader-dir",
        dest="shader_dir",
        default=None,
        help="Root directory holding the shader sources (default: ./assets/shaders).",
    )
    p.add_argument(
        "-c", "--compiler",
        dest="compiler",
        default=None,
        help="Compiler executable invoked as '<compiler> <source> -o <output>' (default: glslc).",
    )
    p.add_argument(
        "--suffix",
        dest="artifact_suffix",
        default=None,
        help="Suffix appended to each source to name its artifact (default: .spv).",
    )

    # --- Execution Strategy ---
    p.add_argument(
        "-j", "--jobs",
        dest="max_workers",
        type=int,
        default=None,
        help="Maximum number of concurrent compiler processes (0 = automatic).",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep existing artifacts instead of deleting them first.",
    )
    mode.add_argument(
        "--clean-only",
        action="store_true",
        help="Delete existing artifacts and stop without compiling.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be deleted and compiled without touching anything.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration of the last session.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the resolved configuration for future runs.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this file (rotated).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["shader_dir"] = args.shader_dir
    overrides["compiler"] = args.compiler
    overrides["artifact_suffix"] = args.artifact_suffix
    overrides["max_workers"] = args.max_workers

    if args.no_clean:
        overrides["clean_first"] = False

    return overrides
