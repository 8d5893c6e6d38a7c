import os
from pathlib import Path
from typing import Any, Union

from needle.operators import I18NFactoryOperator, OverlayOperator
from needle.pointer import L, SemanticPointer
from needle.spec import SemanticPointerProtocol

from .messaging import MessageBus

DEFAULT_LANG = "en"


def detect_lang() -> str:
    """Detects the message language from the environment."""
    # 1. Explicit override
    env_lang = os.getenv("APPEXPLORER_LANG")
    if env_lang:
        return env_lang

    # 2. System LANG (e.g. en_US.UTF-8 -> en)
    sys_lang = os.getenv("LANG")
    if sys_lang:
        base_lang = sys_lang.split(".")[0].split("_")[0]
        if base_lang and base_lang not in ("C", "POSIX"):
            return base_lang.lower()

    return DEFAULT_LANG


# --- Composition root for user-facing messages ---
# 1. The catalogue ships inside the package: assets/needle/<lang>/<area>.json
_assets_root = Path(__file__).parent / "assets"
_lang = detect_lang()

# 2. One file-system operator per language; English fills the gaps
_factory = I18NFactoryOperator(_assets_root)
_operators = [_factory(_lang)]
if _lang != DEFAULT_LANG:
    _operators.append(_factory(DEFAULT_LANG))
appexplorer_nexus = OverlayOperator(_operators)

# 3. The bus resolves through the nexus; the CLI installs a renderer
bus = MessageBus(operator=appexplorer_nexus)


def appexplorer_operator(key: Union[str, SemanticPointerProtocol], **kwargs: Any) -> str:
    """Resolves a message id to its formatted string, e.g. for CLI help texts."""
    return bus.render_to_string(key, **kwargs)


__all__ = [
    "bus",
    "appexplorer_nexus",
    "appexplorer_operator",
    "detect_lang",
    "L",
    "SemanticPointer",
]
