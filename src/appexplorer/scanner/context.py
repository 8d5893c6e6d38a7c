from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List

from appexplorer.spec import (
    AnnotationRecord,
    ComponentRecord,
    DefinedComponent,
    NamePatternProtocol,
    NodeIdentity,
    ReferencedComponent,
    ScanReport,
)
from appexplorer.workspace.config import AppExplorerConfig
from .identity import IdentityResolver
from .session import CompilationSession
from .traversal import DebugSink


@dataclass
class ScanAccumulator:
    """
    The mutable report every detector writes into during one scan.

    It is created empty per scan, handed to each detector by reference, and
    frozen into a ScanReport once the pass is over. Detectors run one after
    another on a single thread; nothing here is safe for concurrent use.
    """

    exports: List[NodeIdentity] = field(default_factory=list)
    components: Dict[NodeIdentity, ComponentRecord] = field(default_factory=dict)
    annotations: List[AnnotationRecord] = field(default_factory=list)
    debug_log: List[str] = field(default_factory=list)

    def export(self, identity: NodeIdentity) -> None:
        if identity not in self.exports:
            self.exports.append(identity)

    def define(self, identity: NodeIdentity, record: DefinedComponent) -> None:
        # A definition always wins over a reference seen earlier
        self.components[identity] = record

    def reference(self, identity: NodeIdentity, record: ReferencedComponent) -> None:
        existing = self.components.get(identity)
        if existing is None:
            self.components[identity] = record
        elif isinstance(existing, ReferencedComponent):
            if existing.is_placeholder and not record.is_placeholder:
                self.components[identity] = record

    def annotate(self, record: AnnotationRecord) -> None:
        self.annotations.append(record)

    def freeze(self, path: str, revision: str = "", remote_origin: str = "") -> ScanReport:
        return ScanReport(
            path=path,
            exports=tuple(self.exports),
            components=MappingProxyType(dict(self.components)),
            annotations=tuple(self.annotations),
            debug_log=tuple(self.debug_log),
            revision=revision,
            remote_origin=remote_origin,
        )


@dataclass
class ScannerContext:
    session: CompilationSession
    identities: IdentityResolver
    config: AppExplorerConfig
    base_classes: NamePatternProtocol
    lazy_loaders: NamePatternProtocol
    data: ScanAccumulator
    debug: DebugSink

    def identify(self, node) -> NodeIdentity:
        return self.identities.identify(node)
