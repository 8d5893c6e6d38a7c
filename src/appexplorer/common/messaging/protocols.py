from typing import Protocol


class Renderer(Protocol):
    """
    Defines the contract for presenting a formatted message.
    """

    def render(self, message: str, level: str) -> None: ...
