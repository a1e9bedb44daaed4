"""Scaffolder -- generates standalone example project directories.

Quick usage::

    from fhevm_examples.scaffolder import ProjectGenerator

    generator = ProjectGenerator()
    result = await generator.generate("fhe-counter", "./out")
"""

from fhevm_examples.scaffolder.generator import ProjectGenerator, ScaffoldResult, scaffold
from fhevm_examples.scaffolder.git import GitInitResult, init_repository

__all__ = [
    "GitInitResult",
    "ProjectGenerator",
    "ScaffoldResult",
    "init_repository",
    "scaffold",
]
