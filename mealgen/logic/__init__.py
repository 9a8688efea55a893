"""Core logic layer.

Subpackages:
- prompting: task templates and prompt rendering
- generation: model invocation, tool registry, reply cleanup
- parsing: fallback parser for free-text meal plans
"""
__all__ = ["prompting", "generation", "parsing"]
