"""
Tabular export utilities.

Flattens nested S&S product records into flat rows and renders them as CSV
text, plus the JSON payload formatting shared by the tool handlers.

Column set: the first record decides the columns. Later records are
projected onto them (missing keys render empty, extra keys are dropped);
heterogeneous record shapes are not reconciled.
"""

import csv
import io
import json
from typing import Any, Iterable, Optional, Sequence

from ss_activewear.models.schemas import FlatRow, ProductRecord

NO_DATA = "No data available"
WAREHOUSES_FIELD = "warehouses"
WAREHOUSE_COLUMNS = ("warehouses_qty", "warehouses_warehouse", "warehouses_closeout")


def to_json_text(data: Any) -> str:
    """Pretty JSON payload returned by the tool handlers."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _scalar(value: Any) -> Any:
    """Cell value for a scalar; ``None`` becomes an empty cell."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return _compact_json(value)
    return value


def select_warehouse(
    warehouses: Sequence[Any],
    preferred: Iterable[str] = (),
) -> dict[str, Any]:
    """
    Pick the warehouse entry to report for a record.

    The first entry whose ``warehouseAbbr`` is in ``preferred`` wins;
    otherwise the first entry.
    """
    entries = [w for w in warehouses if isinstance(w, dict)]
    if not entries:
        return {}
    wanted = {code.upper() for code in preferred}
    if wanted:
        for entry in entries:
            if str(entry.get("warehouseAbbr") or "").upper() in wanted:
                return entry
    return entries[0]


def _warehouse_columns(warehouses: Sequence[Any], preferred: Iterable[str]) -> FlatRow:
    chosen = select_warehouse(warehouses, preferred)
    qty = chosen.get("qty")
    closeout = chosen.get("closeout")
    return {
        "warehouses_qty": 0 if qty is None else qty,
        "warehouses_warehouse": _scalar(chosen.get("warehouseAbbr")),
        "warehouses_closeout": False if closeout is None else closeout,
    }


def flatten_record(record: ProductRecord, preferred: Iterable[str] = ()) -> FlatRow:
    """Flatten one record into a single-level row."""
    row: FlatRow = {}
    for key, value in record.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                row[f"{key}_{sub_key}"] = _scalar(sub_value)
        elif isinstance(value, list):
            if key == WAREHOUSES_FIELD and value:
                row.update(_warehouse_columns(value, preferred))
            else:
                row[key] = _compact_json(value)
        else:
            row[key] = _scalar(value)
    return row


def flatten(
    records: Sequence[ProductRecord],
    preferred_warehouses: Iterable[str] = (),
) -> list[FlatRow]:
    """
    Flatten product records into rows sharing the first record's columns.

    Args:
        records: Normalized product records.
        preferred_warehouses: Warehouse codes to prefer when collapsing
            the ``warehouses`` array.

    Returns:
        One row per record, in input order.
    """
    preferred = tuple(preferred_warehouses)
    flat = [flatten_record(r, preferred) for r in records if isinstance(r, dict)]
    if not flat:
        return []
    columns = list(flat[0].keys())
    return [{column: row.get(column, "") for column in columns} for row in flat]


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def render(rows: Sequence[FlatRow], columns: Optional[Sequence[str]] = None) -> str:
    """
    Render rows as CSV text.

    Fields containing a comma, quote or line break are quoted with inner
    quotes doubled. An empty row set renders as ``No data available``.
    """
    if not rows:
        return NO_DATA
    columns = list(columns or rows[0].keys())

    # A CRLF terminator makes the writer quote fields holding either CR or LF.
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
    body = [[_cell(row.get(column, "")) for column in columns] for row in rows]
    lines = []
    for values in [columns, *body]:
        writer.writerow(values)
        lines.append(buffer.getvalue()[:-2])
        buffer.seek(0)
        buffer.truncate()
    return "\n".join(lines)


def to_csv(
    records: Sequence[ProductRecord],
    preferred_warehouses: Iterable[str] = (),
) -> str:
    """Flatten and render in one step."""
    return render(flatten(records, preferred_warehouses))
