"""turinglock export: source text from decoded instructions.

Public API::

    from turinglock.export import to_assembly
    text = to_assembly(instructions)
"""

from .asm import to_assembly

__all__ = ["to_assembly"]
