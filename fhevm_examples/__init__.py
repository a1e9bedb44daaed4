"""FHEVM example tools: project scaffolder and documentation generator."""

__version__ = "1.0.0"
