#!/usr/bin/env python3
"""
fitcoach - FIT workout decoding and normalized workout model
"""

__version__ = "0.1.0"

from .exceptions import (
    FitCoachError,
    ConfigurationError,
    FitParseError,
    MalformedHeaderError,
    TruncatedRecordError,
    UndefinedLocalMessageError,
    CrcMismatchError,
    MissingSessionError,
    FileTooLargeError,
    InvalidFieldValueError,
    UnknownMessageTypeError,
)
from .config import DecoderSettings, get_settings, setup_logging
from .storage import (
    WorkoutData, WorkoutSummary, Lap, WorkoutRecord, DeviceInfo, summary_columns,
)
from .processors import (
    FitActivityProcessor, ParseResult, ParseDiagnostics, parse_fit_file,
)
from .analytics import build_analysis_context

__all__ = [
    '__version__',
    # Entry points
    'parse_fit_file',
    'FitActivityProcessor',
    'ParseResult',
    'ParseDiagnostics',
    'build_analysis_context',
    'summary_columns',
    # Models
    'WorkoutData',
    'WorkoutSummary',
    'Lap',
    'WorkoutRecord',
    'DeviceInfo',
    # Configuration
    'DecoderSettings',
    'get_settings',
    'setup_logging',
    # Errors
    'FitCoachError',
    'ConfigurationError',
    'FitParseError',
    'MalformedHeaderError',
    'TruncatedRecordError',
    'UndefinedLocalMessageError',
    'CrcMismatchError',
    'MissingSessionError',
    'FileTooLargeError',
    'InvalidFieldValueError',
    'UnknownMessageTypeError',
]
