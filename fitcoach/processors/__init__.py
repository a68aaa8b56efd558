#!/usr/bin/env python3
"""
Processors Module - FIT decoding pipeline
"""

from .interface import (
    MessageType,
    FitMessage,
    RawMessage,
    ParseDiagnostics,
    ParseResult,
)
from .reader import FitReader, FitHeader, calculate_crc
from .decoder import MessageDecoder, DecodedActivity
from .transformer import WorkoutTransformer
from .activity import FitActivityProcessor, parse_fit_file

__all__ = [
    'MessageType',
    'FitMessage',
    'RawMessage',
    'ParseDiagnostics',
    'ParseResult',
    'FitReader',
    'FitHeader',
    'calculate_crc',
    'MessageDecoder',
    'DecodedActivity',
    'WorkoutTransformer',
    'FitActivityProcessor',
    'parse_fit_file',
]
