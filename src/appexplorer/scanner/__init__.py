from .annotations import assign_sequence_keys, detect_annotations
from .binder import Binder, Symbol
from .components import (
    detect_class_component,
    detect_function_component,
    detect_lazy_component,
    find_jsx,
)
from .context import ScanAccumulator, ScannerContext
from .core import DEFAULT_DETECTORS, scan_file, scan_session
from .identity import DEFAULT_RULES, IdentityResolver, IdentityRule
from .patterns import NamePattern
from .session import CompilationSession
from .traversal import DebugSink, walk

__all__ = [
    "assign_sequence_keys",
    "detect_annotations",
    "Binder",
    "Symbol",
    "detect_class_component",
    "detect_function_component",
    "detect_lazy_component",
    "find_jsx",
    "ScanAccumulator",
    "ScannerContext",
    "DEFAULT_DETECTORS",
    "scan_file",
    "scan_session",
    "DEFAULT_RULES",
    "IdentityResolver",
    "IdentityRule",
    "NamePattern",
    "CompilationSession",
    "DebugSink",
    "walk",
]
