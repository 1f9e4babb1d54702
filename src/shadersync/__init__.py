"""Clean and recompile a tree of shaders into SPIR-V artifacts."""

__version__ = "1.0.0"
