class AppExplorerError(Exception):
    """Base exception for scanner and back-patcher errors."""

    pass


class SourceNotFoundError(AppExplorerError):
    """Raised when a source path does not point at a regular file."""

    pass


class SourceParseError(AppExplorerError):
    """Raised when a source file cannot be parsed into a syntax tree."""

    pass


class LocationFormatError(AppExplorerError):
    """Raised when a location string does not follow `<path>#L<start>[-<end>]`."""

    pass


class UnresolvableIdentityError(AppExplorerError):
    """
    Raised when no identity rule covers a node.

    This signals a syntax shape the identity chain does not handle yet; it is
    never recovered at runtime.
    """

    def __init__(self, kind: str, printed: str):
        self.kind = kind
        self.printed = printed
        super().__init__(f"Symbol not found for {kind}\n{printed}")


class UnsupportedSyntaxError(AppExplorerError):
    """Raised when a detector meets a node shape it explicitly assumes away."""

    pass


class ConfigError(AppExplorerError):
    """Raised when the [tool.appexplorer] table is malformed."""

    pass
