from .exceptions import (
    AppExplorerError,
    ConfigError,
    LocationFormatError,
    SourceNotFoundError,
    SourceParseError,
    UnresolvableIdentityError,
    UnsupportedSyntaxError,
)
from .location import SourceLocation, format_location, location_file
from .models import (
    UNKNOWN_LOCATION,
    AnnotationRecord,
    ComponentRecord,
    CrossReference,
    CrossReferenceLink,
    DefinedComponent,
    NodeIdentity,
    ReferencedComponent,
    ScanReport,
    SymbolDescriptor,
)
from .protocols import NamePatternProtocol, NodeDetector, VisitCallback

__all__ = [
    "AppExplorerError",
    "ConfigError",
    "LocationFormatError",
    "SourceNotFoundError",
    "SourceParseError",
    "UnresolvableIdentityError",
    "UnsupportedSyntaxError",
    "SourceLocation",
    "format_location",
    "location_file",
    "UNKNOWN_LOCATION",
    "AnnotationRecord",
    "ComponentRecord",
    "CrossReference",
    "CrossReferenceLink",
    "DefinedComponent",
    "NodeIdentity",
    "ReferencedComponent",
    "ScanReport",
    "SymbolDescriptor",
    "NamePatternProtocol",
    "NodeDetector",
    "VisitCallback",
]
