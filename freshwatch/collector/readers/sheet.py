"""Reader for the spreadsheet endpoint the sensor node publishes to.

The endpoint is a script attached to the spreadsheet. Depending on how it
is deployed it answers with a JSON array of row objects, a JSON object
wrapping such an array, an array of arrays with a header row, or a plain
CSV export. All of those are normalised into SensorReading records.
"""

import asyncio
import csv
import io
import json
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import aiohttp

from freshwatch.shared.models import SensorReading, as_float
from freshwatch.collector.config.settings import SheetConfig
from .base import RecordSource

logger = logging.getLogger(__name__)


class SheetFetchError(RuntimeError):
    """Raised when the spreadsheet endpoint cannot be read."""


# Column name -> SensorReading field. Keys are lower case with single spaces.
COLUMN_ALIASES = {
    'timestamp': 'timestamp',
    'waktu': 'timestamp',
    'time': 'timestamp',
    'suhu ikan': 'temperature',
    'suhu': 'temperature',
    'temperature': 'temperature',
    'nilai gas': 'gas_value',
    'e (nilai gas)': 'gas_value',
    'gas': 'gas_value',
    'gas value': 'gas_value',
    'avg rgb': 'color_value',
    'f (avg rgb)': 'color_value',
    'avg': 'color_value',
    'nilai warna': 'color_value',
    'color': 'color_value',
    'color value': 'color_value',
    'warna ikan': 'color_label',
    'status warna': 'color_label',
    'color label': 'color_label',
    'color status': 'color_label',
    'status gas': 'gas_label',
    'gas label': 'gas_label',
    'gas status': 'gas_label',
}

NUMERIC_FIELDS = ('temperature', 'gas_value', 'color_value')
LABEL_FIELDS = ('color_label', 'gas_label')

TIMESTAMP_FORMATS = (
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
)


def normalize_column(name: Any) -> str:
    return " ".join(str(name).replace("_", " ").split()).lower()


def to_number(value: Any) -> Optional[float]:
    """Parse a sheet cell as a number.

    Text cells follow the Indonesian locale the sheet is kept in: '.' is a
    thousands separator and ',' the decimal mark ("4.500" is 4500,
    "1.234,5" is 1234.5). Numeric cells are taken as they are.
    """
    if isinstance(value, str):
        text = value.strip().replace(".", "").replace(",", ".", 1)
        return as_float(text)
    return as_float(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a sheet timestamp.

    Aware timestamps are converted to naive UTC; naive ones are kept as is.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            parsed = None
            for fmt in TIMESTAMP_FORMATS:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
            if parsed is None:
                return None

    if parsed.tzinfo is not None:
        # Keep every timestamp naive so histories compare and subtract cleanly
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_row(row: Mapping[str, Any]) -> Optional[SensorReading]:
    """Turn one raw sheet row into a reading.

    Rows without a parseable timestamp, or without any scored metric, are
    dropped (None).
    """
    fields: Dict[str, Any] = {}
    for column, value in row.items():
        target = COLUMN_ALIASES.get(normalize_column(column))
        if target is None or target in fields:
            continue
        fields[target] = value

    timestamp = parse_timestamp(fields.get('timestamp'))
    if timestamp is None:
        logger.debug(f"Skipping row without timestamp: {dict(row)}")
        return None

    values = {name: to_number(fields.get(name)) for name in NUMERIC_FIELDS}
    labels = {}
    for name in LABEL_FIELDS:
        text = str(fields.get(name) or "").strip().upper()
        labels[name] = text or None

    reading = SensorReading(timestamp=timestamp, **values, **labels)
    if not reading.has_metrics():
        logger.debug(f"Skipping row without gas or colour value: {dict(row)}")
        return None
    return reading


def extract_rows(body: str) -> List[Dict[str, Any]]:
    """Find the row objects in an endpoint response body."""
    rows: Optional[List[Any]] = None
    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None

    if isinstance(parsed, list):
        rows = parsed
    elif isinstance(parsed, dict):
        if isinstance(parsed.get("data"), list):
            rows = parsed["data"]
        else:
            rows = next((value for value in parsed.values() if isinstance(value, list)), None)

    if rows is None and re.search(r"timestamp|suhu", body, re.IGNORECASE) and re.search(r"[,\n]", body):
        rows = list(csv.DictReader(io.StringIO(body.strip())))

    if rows is None:
        raise SheetFetchError(f"Unrecognised response body: {body[:200]!r}")

    # Array of arrays: first row is the header
    if rows and isinstance(rows[0], list):
        header = [str(name).strip() for name in rows[0]]
        rows = [dict(zip(header, row)) for row in rows[1:] if isinstance(row, list)]

    return [row for row in rows if isinstance(row, dict)]


def parse_body(body: str) -> List[SensorReading]:
    readings = [normalize_row(row) for row in extract_rows(body)]
    return sorted(
        (reading for reading in readings if reading is not None),
        key=lambda reading: reading.timestamp,
    )


class SheetReader(RecordSource):
    """Fetches the whole reading history from the spreadsheet endpoint.

    One HTTP GET per call; scheduling repeated fetches is up to the caller.
    """

    def __init__(self, config: SheetConfig):
        if not config.url:
            raise ValueError("Sheet URL is not configured (sheet.url or FRESHWATCH_SHEET_URL)")
        self.config = config
        logger.info(f"Initialized SheetReader for {config.url}")

    async def _get_body(self, session: aiohttp.ClientSession) -> str:
        # Cache-buster: the script endpoint is served through a caching proxy
        params = {"_": str(int(time.time() * 1000))}
        async with session.get(self.config.url, params=params) as response:
            body = await response.text()
            if response.status >= 400:
                raise SheetFetchError(f"Sheet endpoint returned HTTP {response.status}")
            return body

    async def fetch(self) -> List[SensorReading]:
        """Fetch and normalise every row.

        Raises:
            SheetFetchError: On HTTP errors, network errors or an
                unrecognised body.
        """
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                body = await self._get_body(session)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SheetFetchError(f"Failed to reach sheet endpoint: {e}") from e

        readings = parse_body(body)
        logger.debug(f"Fetched {len(readings)} readings from sheet")
        return readings

    def get_readings(self) -> List[SensorReading]:
        return asyncio.run(self.fetch())

    def check_health(self) -> bool:
        try:
            self.get_readings()
            return True
        except SheetFetchError as e:
            logger.error(f"Sheet health check failed: {e}")
            return False
