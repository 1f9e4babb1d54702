from __future__ import annotations

"""
Domain Constants.

Provides centralized access to application-wide constants: artifact naming,
the default compiler and shader locations, and configuration versioning.
"""

import os

CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_ARTIFACT_SUFFIX = ".spv"
DEFAULT_COMPILER = "glslc"

# Relative to the working directory the tool is started from
DEFAULT_SHADER_SUBDIR = os.path.join("assets", "shaders")

# 0 lets the executor pick its own worker count
DEFAULT_MAX_WORKERS = 0
