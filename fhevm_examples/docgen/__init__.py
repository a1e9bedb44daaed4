"""Documentation generator for the bundled examples.

Quick usage::

    from fhevm_examples.docgen import DocGenerator

    result = await DocGenerator().generate_all()
"""

from fhevm_examples.docgen.generator import DocGenerator, DocsResult, ExampleDoc, category_label

__all__ = [
    "DocGenerator",
    "DocsResult",
    "ExampleDoc",
    "category_label",
]
