import subprocess
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Optional


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    raise TypeError(f"Unsupported config value: {value!r}")


class WorkspaceFactory:
    """
    Builds throwaway project trees for tests.

    Calls chain: `WorkspaceFactory(tmp_path).with_config({...}).with_source(...).build()`.
    Nothing touches the disk until `build()`, except `init_git()`.
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: Dict[str, str] = {}
        self._config: Optional[Dict[str, Any]] = None

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config = config
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files[path] = dedent(content).lstrip("\n")
        return self

    def with_raw_file(self, path: str, content: str) -> "WorkspaceFactory":
        # Written byte-for-byte: no dedent, no newline translation
        self._files[path] = content
        return self

    def _render_pyproject(self) -> str:
        lines: List[str] = ['[project]', 'name = "test-project"', ""]
        if self._config is not None:
            lines.append("[tool.appexplorer]")
            for key, value in self._config.items():
                lines.append(f"{key} = {_toml_value(value)}")
        return "\n".join(lines) + "\n"

    def init_git(self, remote: Optional[str] = None) -> "WorkspaceFactory":
        self.root_path.mkdir(parents=True, exist_ok=True)
        self._git("init", "-q")
        self._git("config", "user.email", "test@example.com")
        self._git("config", "user.name", "Test")
        if remote:
            self._git("remote", "add", "origin", remote)
        return self

    def commit(self, message: str = "initial") -> "WorkspaceFactory":
        self._git("add", "-A")
        self._git("commit", "-q", "--allow-empty", "-m", message)
        return self

    def _git(self, *args: str) -> None:
        subprocess.run(["git", *args], cwd=self.root_path, check=True, capture_output=True)

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        (self.root_path / "pyproject.toml").write_text(self._render_pyproject(), encoding="utf-8")
        for rel_path, content in self._files.items():
            target = self.root_path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content.encode("utf-8"))
        return self.root_path
