from .builder import GraphBuilder

__all__ = ["GraphBuilder"]
