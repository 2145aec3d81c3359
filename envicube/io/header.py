"""Parsing of ENVI-style ``key = value`` header and range files."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..codec import DataType
from ..errors import ErrorKind, Status
from ..layout import Interleave
from ..options import DataOptions, DataRange
from ..utils import get_logger

logger = get_logger(__name__)

MAX_HEADER_DEPTH = 8

RANGE_KEYS = {
    "start row": "start_row",
    "end row": "end_row",
    "start col": "start_col",
    "end col": "end_col",
    "start band": "start_band",
    "end band": "end_band",
}


def read_config_values(path: Path) -> Dict[str, str]:
    """Return key/value pairs of a config file, or {} if it cannot be read.

    Keys are lower-cased; lines starting with ``#`` and lines without ``=`` are
    skipped. Later duplicates win.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        logger.error("Configuration file '%s' could not be opened for reading: %s", path, e)
        return {}

    values: Dict[str, str] = {}
    for line in text.splitlines():
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        values[key.lower()] = value.strip()
    return values


def _parse_int(values: Dict[str, str], key: str, problems: list) -> Optional[int]:
    raw = values.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        problems.append(f"Invalid integer for '{key}': {raw}")
        return None


def _resolve(path_text: str, relative_to: Path) -> Path:
    path = Path(path_text).expanduser()
    if not path.is_absolute():
        path = relative_to / path
    return path


def parse_header(
    header_path: Path,
    base: Optional[DataOptions] = None,
    _depth: int = 0,
    _mandatory: Optional[bool] = None,
) -> Tuple[Optional[DataOptions], Status]:
    """Build DataOptions from an ENVI header file.

    Values absent from the header keep those of ``base``. When ``base`` is
    given, problems are non-fatal: they are reported and the affected fields
    keep their defaults. Without ``base`` a header yielding no values at all is
    fatal and ``None`` is returned.
    """
    header_path = Path(header_path)
    if _mandatory is None:
        _mandatory = base is None
    values = read_config_values(header_path)
    if not values:
        message = f"No header values available in {header_path}"
        logger.error(message)
        return (None if _mandatory else base), Status.failure(ErrorKind.CONFIGURATION, message, fatal=_mandatory)

    options = base or DataOptions()
    problems: list = []

    if "data" in values:
        options = replace(options, file_path=_resolve(values["data"], header_path.parent))

    if "header" in values:
        target = _resolve(values["header"], header_path.parent)
        if _depth >= MAX_HEADER_DEPTH:
            message = f"Header indirection deeper than {MAX_HEADER_DEPTH} at {header_path}"
            logger.error(message)
            return (None if _mandatory else options), Status.failure(ErrorKind.CONFIGURATION, message, fatal=_mandatory)
        logger.info("Reading header info from %s", target)
        return parse_header(target, options, _depth + 1, _mandatory)

    if "interleave" in values:
        try:
            options = replace(options, interleave=Interleave.from_token(values["interleave"]))
            logger.info("Option set: interleave %s.", options.interleave.name)
        except ValueError as e:
            problems.append(str(e))

    if "data type" in values:
        try:
            options = replace(options, data_type=DataType.from_token(values["data type"]))
            logger.info("Option set: data type %s.", options.data_type.token)
        except ValueError as e:
            problems.append(str(e))

    if "byte order" in values:
        options = replace(options, big_endian=values["byte order"] == "1")
        logger.info("Option set: big endian = %s.", options.big_endian)

    header_offset = _parse_int(values, "header offset", problems)
    if header_offset is not None and header_offset < 0:
        problems.append(f"Header offset must not be negative: {header_offset}")
    elif header_offset is not None:
        options = replace(options, header_offset=header_offset)
        logger.info("Header offset = %d.", header_offset)

    # BSQ headers list samples along rows; the other layouts along columns.
    if options.interleave is Interleave.BSQ:
        rows_key, cols_key = "samples", "lines"
    else:
        rows_key, cols_key = "lines", "samples"

    rows = _parse_int(values, rows_key, problems)
    if rows is not None:
        options = replace(options, num_data_rows=rows)
        logger.info("Number of rows = %d.", rows)
    cols = _parse_int(values, cols_key, problems)
    if cols is not None:
        options = replace(options, num_data_cols=cols)
        logger.info("Number of columns = %d.", cols)
    bands = _parse_int(values, "bands", problems)
    if bands is not None:
        options = replace(options, num_data_bands=bands)
        logger.info("Number of bands = %d.", bands)

    if problems:
        for problem in problems:
            logger.error(problem)
        return options, Status.failure(ErrorKind.CONFIGURATION, "; ".join(problems))
    return options, Status.success()


def parse_range(range_path: Path, base: Optional[DataRange] = None) -> Tuple[DataRange, Status]:
    """Build a DataRange from a range file; missing keys keep ``base`` values."""
    range_path = Path(range_path)
    data_range = base or DataRange()
    values = read_config_values(range_path)
    if not values:
        message = f"No range values available in {range_path}"
        logger.error(message)
        return data_range, Status.failure(ErrorKind.CONFIGURATION, message)

    problems: list = []
    updates = {}
    for key, field_name in RANGE_KEYS.items():
        value = _parse_int(values, key, problems)
        if value is not None:
            updates[field_name] = value
    data_range = replace(data_range, **updates)

    if problems:
        for problem in problems:
            logger.error(problem)
        return data_range, Status.failure(ErrorKind.CONFIGURATION, "; ".join(problems))
    return data_range, Status.success()
