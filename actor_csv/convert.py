"""
Core conversion logic: JSON array of actor records -> fixed-schema CSV.

Responsibilities:
- load + parse the whole input document (strict UTF-8, finite numbers, no lone surrogates)
- project each object onto the fixed field list
- serialize header + rows as UTF-8 with BOM (utf-8-sig)
- derive the default output path
"""

from __future__ import annotations

import base64
import csv
import hashlib
import io
import json
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from charset_normalizer import from_bytes

from .errors import FileAccessError, ParseError
from .rules import (
    ACTOR_FIELDS,
    INPUT_SUFFIX,
    LINE_TERMINATOR,
    NORMALIZED_DELIMITER,
    OUTPUT_SUFFIX,
    TARGET_ENCODING,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    input_path: str
    output_path: str
    data_rows: int
    skipped: int
    rows_written: int


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _decode(raw: bytes, source: str) -> str:
    """
    Decode input bytes for the JSON parser.

    Rules:
    - Input must be UTF-8 (a leading BOM is dropped).
    - Anything else is unparseable; charset-normalizer only names the
      likely encoding in the error message.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        utf8_error = e

    match = from_bytes(raw).best()
    if match is None:
        raise ParseError(source, f"input is not valid UTF-8 ({utf8_error.reason})", utf8_error)
    raise ParseError(source, f"input is not valid UTF-8 (looks like {match.encoding})", utf8_error)


def _check_encodable(data: Any, source: str) -> None:
    # \ud800-style escapes parse into lone surrogates that cannot be written as UTF-8
    try:
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise ParseError(source, "invalid unicode (lone surrogate)", e) from e


def parse_records(raw: bytes, source: str) -> List[Any]:
    """Parse a complete JSON document that must be a top-level array."""
    text = _decode(raw, source)
    try:
        data = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        raise ParseError(source, str(e), e) from e

    if not isinstance(data, list):
        raise ParseError(source, f"top-level JSON value must be an array, got {type(data).__name__}")
    _check_encodable(data, source)

    logger.info(f"{source}: parsed {len(data)} array elements")
    return data


def load_records(path: str) -> List[Any]:
    path = os.fspath(path)
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileAccessError(path, e, action="open input") from e

    return parse_records(raw, path)


def to_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # numbers, booleans, arrays and objects keep their compact JSON text
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def project_record(record: Dict[str, Any], fields: Sequence[str] = ACTOR_FIELDS) -> List[str]:
    return [to_cell(record.get(field)) for field in fields]


def iter_rows(records: Iterable[Any], fields: Sequence[str] = ACTOR_FIELDS) -> Iterator[List[str]]:
    """Yield one projected row per JSON object; other elements are dropped."""
    for i, item in enumerate(records):
        if not isinstance(item, dict):
            logger.debug(f"skipping element {i}: {type(item).__name__} is not an object")
            continue
        yield project_record(item, fields)


def _write_rows(handle, header: Sequence[str], rows: Iterable[Sequence[str]]) -> int:
    writer = csv.writer(handle, delimiter=NORMALIZED_DELIMITER, lineterminator=LINE_TERMINATOR)

    writer.writerow(header)
    written = 1
    for row in rows:
        writer.writerow(row)
        written += 1
    return written


def write_csv(path: str, header: Sequence[str], rows: Iterable[Sequence[str]]) -> int:
    """
    Write header + rows to `path` as UTF-8 with BOM.

    The utf-8-sig codec emits EF BB BF before the first character, so the
    header always follows the BOM. Returns the number of rows written,
    header included.
    """
    path = os.fspath(path)
    try:
        handle = open(path, "w", encoding=TARGET_ENCODING, newline="")
    except OSError as e:
        raise FileAccessError(path, e, action="create output") from e

    with handle:
        try:
            return _write_rows(handle, header, rows)
        except OSError as e:
            raise FileAccessError(path, e, action="write output") from e


def render_csv_bytes(header: Sequence[str], rows: Iterable[Sequence[str]]) -> Tuple[bytes, int]:
    outp = io.StringIO(newline="")
    written = _write_rows(outp, header, rows)
    return outp.getvalue().encode(TARGET_ENCODING), written


def derive_output_path(input_path: str) -> str:
    path = os.fspath(input_path)
    if path.endswith(INPUT_SUFFIX):
        return path[: -len(INPUT_SUFFIX)] + OUTPUT_SUFFIX
    return path + OUTPUT_SUFFIX


def convert_file(input_path: str, output_path: Optional[str] = None) -> ConversionResult:
    input_path = os.fspath(input_path)
    if output_path is None:
        output_path = derive_output_path(input_path)
    output_path = os.fspath(output_path)

    records = load_records(input_path)
    rows_written = write_csv(output_path, ACTOR_FIELDS, iter_rows(records))
    data_rows = rows_written - 1

    logger.info(f"{input_path} -> {output_path}: {data_rows} rows, {len(records) - data_rows} skipped")
    return ConversionResult(
        input_path=input_path,
        output_path=output_path,
        data_rows=data_rows,
        skipped=len(records) - data_rows,
        rows_written=rows_written,
    )


def convert_json_bytes(raw: bytes, source: str) -> Dict[str, Any]:
    """
    In-memory conversion of an uploaded document.
    Returns a dict matching the API's response envelope.
    """
    records = parse_records(raw, source)
    content, rows_written = render_csv_bytes(ACTOR_FIELDS, iter_rows(records))
    data_rows = rows_written - 1

    b64 = base64.b64encode(content).decode("ascii")
    return {
        "converted_csv": {
            "filename": os.path.basename(derive_output_path(source)),
            "sha256": _sha256_hex(content),
            "encoding": TARGET_ENCODING,
            "content_b64": b64,
        },
        "report": {
            "summary": {
                "rows": data_rows,
                "columns": len(ACTOR_FIELDS),
                "skipped": len(records) - data_rows,
                "deterministic": True,
            },
        },
    }
