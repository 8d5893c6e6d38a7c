from .writer import CrossReferenceWriter

__all__ = ["CrossReferenceWriter"]
