from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import networkx as nx
from needle.pointer import L

from appexplorer.common import bus
from appexplorer.graph import GraphBuilder
from appexplorer.index import (
    MarkdownData,
    generate_markdown,
    make_index_from_reports,
    read_markdown,
)
from appexplorer.patch import CrossReferenceWriter
from appexplorer.scanner import scan_file
from appexplorer.spec import AppExplorerError, CrossReferenceLink, ScanReport
from appexplorer.workspace import AppExplorerConfig, RepoInfo, Workspace, read_repo_info

DEFAULT_INDEX_NAME = "README.AppExplorer.md"

PathLike = Union[str, Path]


class AppExplorerApp:
    def __init__(self, root_path: Path, config: Optional[AppExplorerConfig] = None):
        self.workspace = Workspace(root_path, config)
        self.root_path = self.workspace.root_path
        self.config = self.workspace.config
        # The app 'has a' graph builder and a writer, it uses them as tools.
        self.graph_builder = GraphBuilder()
        self.writer = CrossReferenceWriter(self.root_path, tag=self.config.cross_reference_tag)
        self.failed_paths: List[str] = []
        self._repo_info: Dict[Path, RepoInfo] = {}

    def _resolve_paths(self, paths: Optional[Sequence[PathLike]]) -> List[str]:
        if not paths:
            return self.workspace.discover_files()

        files: List[str] = []
        for raw in paths:
            path = Path(raw)
            full = path if path.is_absolute() else self.root_path / path
            if full.is_dir():
                rel_dir = self.workspace.relative_path(full)
                scoped = Workspace(self.root_path, replace(self.config, scan_paths=[rel_dir]))
                files.extend(scoped.discover_files())
            else:
                files.append(self.workspace.relative_path(full))
        return list(dict.fromkeys(files))

    def _repo_info_for(self, rel_path: str) -> RepoInfo:
        # Files of one directory share a repository; ask git once per directory
        directory = (self.root_path / rel_path).parent
        if directory not in self._repo_info:
            self._repo_info[directory] = read_repo_info(directory)
        return self._repo_info[directory]

    def run_scan(self, paths: Optional[Sequence[PathLike]] = None) -> List[ScanReport]:
        """
        Scans the given files (or the configured scan paths) and returns one
        report per file that scanned cleanly. Failures are reported on the
        bus and collected in `failed_paths`.
        """
        files = self._resolve_paths(paths)
        if not files:
            bus.warning(L.scan.run.empty)
            return []

        bus.info(L.scan.run.start, count=len(files))
        reports: List[ScanReport] = []
        for rel_path in files:
            bus.debug(L.scan.file.start, path=rel_path)
            try:
                report = scan_file(
                    self.root_path,
                    rel_path,
                    config=self.config,
                    repo_info=self._repo_info_for(rel_path),
                )
            except AppExplorerError as e:
                bus.error(L.error.scan.failed, path=rel_path, error=e)
                self.failed_paths.append(rel_path)
                continue

            bus.info(
                L.scan.file.summary,
                path=rel_path,
                components=len(report.defined_components()),
                annotations=len(report.annotations),
            )
            reports.append(report)

        bus.success(L.scan.run.complete, count=len(reports))
        return reports

    def run_links(self, links: Sequence[CrossReferenceLink]) -> List[bool]:
        """
        Back-patches a batch of confirmed permalinks. Results line up with
        `links`; the first failure stops the batch.
        """
        results = self.writer.write_all(links)
        for link, changed in zip(links, results):
            if changed:
                bus.success(L.link.file.updated, location=link.location)
            else:
                bus.info(L.link.file.unchanged, location=link.location)
        return results

    def run_link(self, location: str, permalink: str) -> bool:
        return self.run_links([CrossReferenceLink(location=location, permalink=permalink)])[0]

    def run_index(
        self,
        paths: Optional[Sequence[PathLike]] = None,
        output: Optional[Path] = None,
    ) -> Path:
        """
        Writes the markdown index of every annotation found. Sub-project
        links of an existing index are kept.
        """
        output = output or self.root_path / DEFAULT_INDEX_NAME
        reports = self.run_scan(paths)

        data = MarkdownData(files=make_index_from_reports(reports))
        if output.is_file():
            data.projects = read_markdown(output.read_text(encoding="utf-8")).projects

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(generate_markdown(data), encoding="utf-8")
        bus.success(L.index.run.written, count=len(data.files), path=output)
        return output

    def run_graph(self, paths: Optional[Sequence[PathLike]] = None) -> nx.DiGraph:
        reports = self.run_scan(paths)
        graph = self.graph_builder.build_component_graph(reports)
        bus.info(
            L.graph.run.summary,
            nodes=graph.number_of_nodes(),
            edges=graph.number_of_edges(),
        )
        return graph
