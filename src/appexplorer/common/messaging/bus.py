from typing import Any, Optional, Union

from needle.spec import OperatorProtocol, SemanticPointerProtocol

from .protocols import Renderer

LEVELS = ("debug", "info", "success", "warning", "error")


class MessageBus:
    """
    Routes user-facing messages to the active renderer.

    Library code only emits message ids; without a renderer the bus stays
    silent, so the scanner itself never presents anything. Templates come
    from the injected operator, and an id it cannot resolve renders as
    itself.
    """

    def __init__(self, operator: OperatorProtocol):
        self._operator = operator
        self._renderer: Optional[Renderer] = None

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def set_operator(self, operator: OperatorProtocol) -> None:
        self._operator = operator

    def render_to_string(
        self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any
    ) -> str:
        template = self._operator(msg_id)
        if template is None:
            return str(msg_id)
        try:
            return str(template).format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return str(template)

    def _render(
        self, level: str, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any
    ) -> None:
        if not self._renderer:
            return
        message = self.render_to_string(msg_id, **kwargs)
        self._renderer.render(message, level)

    def debug(self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: Union[str, SemanticPointerProtocol], **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
