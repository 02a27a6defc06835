# src/cls_kit/parsers/cls_parser.py

import logging
from enum import Enum
from time import monotonic

from cls_kit.decoding.cursor import ByteCursor, BytesLike
from cls_kit.errors import MalformedField, ParseError, ShortRecord, Stage, TrailingBytes
from cls_kit.grammar.combinators import u32le
from cls_kit.grammar.header import header_grammar
from cls_kit.grammar.records import FIXED_BODY_SIZE, RecordGrammars
from cls_kit.observability import names
from cls_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import DocumentParser
from .builder import build_document
from .config import ParseConfig
from .models import Document, Record

logger = logging.getLogger(__name__)

COLOR_SIZE = 4


class ParseState(str, Enum):
    READ_HEADER = "read_header"
    READ_RECORD = "read_record"
    DONE = "done"
    FAILED = "failed"


class ClsParser(DocumentParser):
    """
    Decoder for CLS colour set files.
    - Whole buffer in memory, no I/O
    - Header first, then records until the declared count is reached
    - Fails fast: the first error aborts the parse
    """

    def __init__(
        self,
        config: ParseConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or ParseConfig()
        self.metrics_hook = metrics_hook
        self._header = header_grammar(self.config)
        self._records = RecordGrammars.build(self.config)

    def parse(self, source: BytesLike) -> Document:
        start = monotonic()
        cursor = ByteCursor(source)
        state = ParseState.READ_HEADER
        records: list[Record] = []

        try:
            header = self._header(cursor)

            state = ParseState.READ_RECORD
            while len(records) < header.record_count and not cursor.at_end:
                records.append(self._read_record(cursor, len(records)))

            state = ParseState.DONE
            logger.debug(
                "Read %d of %d declared records, %d bytes left",
                len(records),
                header.record_count,
                cursor.remaining,
            )
            self._check_trailing(cursor)
            document = build_document(header, records, end_offset=cursor.position)
        except ParseError as exc:
            failed_in, state = state, ParseState.FAILED
            logger.error(
                "CLS parse %s in %s: %s", state.value, failed_in.value, exc
            )
            self.metrics_hook.increment(
                names.CLS_PARSE_ERRORS_TOTAL,
                labels={"stage": exc.stage.value, "error": type(exc).__name__},
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.CLS_PARSE_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.CLS_PARSES_TOTAL)
        self.metrics_hook.increment(names.CLS_RECORDS_DECODED, len(document))
        logger.info(
            "Parsed colour set %r with %d records", header.name, len(document)
        )
        return document

    def _read_record(self, cursor: ByteCursor, index: int) -> Record:
        start = cursor.save()

        # Peek at the discriminant, then rewind so the grammar sees the
        # whole record including its length field.
        length = u32le(cursor)
        if length > cursor.remaining:
            raise ShortRecord(
                "Record declares more bytes than remain",
                offset=start,
                expected=length,
                actual=cursor.remaining,
            )
        if length < FIXED_BODY_SIZE:
            raise MalformedField(
                "Record body is shorter than its fixed fields",
                offset=start,
                stage=Stage.RECORD,
                expected=FIXED_BODY_SIZE,
                actual=length,
            )
        cursor.advance(COLOR_SIZE)
        kind_offset = cursor.position
        kind = u32le(cursor)
        cursor.restore(start)

        grammar = self._records.select(kind, offset=kind_offset)
        record = grammar(cursor, index)
        logger.debug(
            "Record %d: %s at offset %d, %d bytes",
            index,
            record.kind.name,
            record.offset,
            record.length,
        )
        return record

    def _check_trailing(self, cursor: ByteCursor) -> None:
        if cursor.at_end:
            return
        if self.config.strict_trailing_bytes:
            raise TrailingBytes(
                "Unconsumed bytes after the last record",
                offset=cursor.position,
                expected=0,
                actual=cursor.remaining,
            )
        logger.debug(
            "Ignoring %d trailing bytes at offset %d",
            cursor.remaining,
            cursor.position,
        )


def parse(
    data: BytesLike,
    config: ParseConfig | None = None,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Document:
    """Decode a complete CLS buffer.

    Args:
        data: The full file contents.
        config: Decoding options. Defaults to ParseConfig().
        metrics_hook: Optional metrics hook for observability.

    Returns:
        A validated, immutable Document.

    Raises:
        ParseError: Exactly one typed error describing the first failure.

    Example:
        >>> document = parse(Path("palette.cls").read_bytes())
        >>> [record.color.hex() for record in document]
    """
    return ClsParser(config, metrics_hook=metrics_hook).parse(data)
