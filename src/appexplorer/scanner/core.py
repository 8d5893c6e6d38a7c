from pathlib import Path
from typing import List, Optional, Sequence, Union

from appexplorer.spec import NodeDetector, ScanReport
from appexplorer.workspace.config import AppExplorerConfig
from appexplorer.workspace.git import RepoInfo
from .annotations import assign_sequence_keys, detect_annotations
from .components import (
    detect_class_component,
    detect_function_component,
    detect_lazy_component,
)
from .context import ScanAccumulator, ScannerContext
from .identity import IdentityResolver
from .patterns import NamePattern
from .session import CompilationSession
from .traversal import DebugSink

DEFAULT_DETECTORS: List[NodeDetector] = [
    detect_lazy_component,
    detect_class_component,
    detect_function_component,
    detect_annotations,
]


def scan_session(
    session: CompilationSession,
    config: Optional[AppExplorerConfig] = None,
    detectors: Optional[Sequence[NodeDetector]] = None,
) -> ScanReport:
    """
    Runs every detector over each top-level statement of a parsed file.

    The pass is single-threaded and shares one accumulator between the
    detectors. Annotation keys are assigned once the pass is complete.
    """
    config = config or AppExplorerConfig()
    detectors = DEFAULT_DETECTORS if detectors is None else detectors

    data = ScanAccumulator()
    context = ScannerContext(
        session=session,
        identities=IdentityResolver(session),
        config=config,
        base_classes=NamePattern(config.component_base_classes),
        lazy_loaders=NamePattern(config.lazy_loaders),
        data=data,
        debug=DebugSink(data.debug_log, session.printer),
    )

    for statement in session.root.named_children:
        for detector in detectors:
            detector(statement, context)

    data.annotations = assign_sequence_keys(data.annotations)
    repo = session.repo_info
    return data.freeze(session.path, revision=repo.revision, remote_origin=repo.remote_origin)


def scan_file(
    root_path: Path,
    rel_path: str,
    source: Union[str, bytes, None] = None,
    config: Optional[AppExplorerConfig] = None,
    repo_info: Optional[RepoInfo] = None,
    detectors: Optional[Sequence[NodeDetector]] = None,
) -> ScanReport:
    session = CompilationSession(root_path, rel_path, source=source, repo_info=repo_info)
    return scan_session(session, config=config, detectors=detectors)
