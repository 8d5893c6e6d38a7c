from .core import AppExplorerApp

__all__ = ["AppExplorerApp"]
