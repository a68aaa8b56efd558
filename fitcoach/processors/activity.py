#!/usr/bin/env python3
"""
Activity Processor - Decodes FIT activity files into normalized workouts (summary, laps, records)
"""
import time
from typing import Optional

from ..config.logging import get_logger
from ..config.settings import DecoderSettings, get_settings
from ..exceptions import FileTooLargeError, FitParseError
from ..storage.model import WorkoutData
from .decoder import MessageDecoder
from .interface import ParseDiagnostics, ParseResult
from .reader import FitReader
from .transformer import WorkoutTransformer


logger = get_logger(__name__)


class FitActivityProcessor:
    """Run the reader, decoder and transformer over one in-memory FIT file"""

    def __init__(self, settings: Optional[DecoderSettings] = None):
        self.settings = settings or get_settings()

    def validate_source(self, buffer: bytes, file_name: str):
        """Reject buffers over the configured upload limit"""
        limit = self.settings.max_file_size_bytes
        if len(buffer) > limit:
            raise FileTooLargeError(
                f"FIT file exceeds {self.settings.max_file_size_mb}MB limit",
                {'file_name': file_name, 'size': len(buffer), 'limit': limit},
            )

    def process(self, buffer: bytes, file_name: str) -> ParseResult:
        """
        Decode a FIT buffer.

        Args:
            buffer: Complete FIT file contents
            file_name: Original upload filename, passed through to the workout

        Returns:
            ParseResult with the workout and per-parse diagnostics

        Raises:
            FitParseError: When the file cannot be parsed
        """
        start = time.perf_counter()
        log = logger.bind(file_name=file_name, size=len(buffer))
        diagnostics = ParseDiagnostics()

        try:
            self.validate_source(buffer, file_name)
            reader = FitReader(buffer, strict_crc=self.settings.strict_crc, diagnostics=diagnostics)
            activity = MessageDecoder(diagnostics).decode_all(reader.messages())
            workout = WorkoutTransformer().transform(activity, file_name)
        except FitParseError as e:
            log.error("Failed to parse FIT file", error=str(e), error_type=type(e).__name__)
            raise

        log.info(
            "FIT data parsed",
            workout_id=workout.id,
            file_type=diagnostics.file_type,
            sessions=diagnostics.sessions_seen,
            laps=len(workout.laps),
            records=len(workout.records),
            unknown_messages=diagnostics.unknown_messages,
            crc_ok=diagnostics.crc_ok,
            processing_time=round(time.perf_counter() - start, 3),
        )
        return ParseResult(workout=workout, diagnostics=diagnostics)


def parse_fit_file(buffer: bytes, file_name: str,
                   settings: Optional[DecoderSettings] = None) -> WorkoutData:
    """Decode a FIT buffer into a WorkoutData"""
    return FitActivityProcessor(settings).process(buffer, file_name).workout
