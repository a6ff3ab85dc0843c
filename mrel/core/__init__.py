"""Core domain types: coordinates, reactor, metadata, config, results."""

from .config import Config, ConfigError, load_config
from .coordinates import ARTIFACT_TYPE_POM, ArtifactCoordinates
from .errors import ConfigurationError, ErrorCode, MetadataLookupError
from .metadata import ReleaseMetadata, ReleasePhase
from .project import ReactorProject, load_reactor
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    # coordinates
    "ARTIFACT_TYPE_POM",
    "ArtifactCoordinates",
    # errors
    "ConfigurationError",
    "ErrorCode",
    "MetadataLookupError",
    # metadata
    "ReleaseMetadata",
    "ReleasePhase",
    # reactor
    "ReactorProject",
    "load_reactor",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
