"""Quote/fill/pnl session transcript writer."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import BinaryIO

from mm_drill.core.errors import SchemaError
from mm_drill.core.types import Side, TsNs, side_name


def _write_json_line(f: BinaryIO, record: dict[str, object]) -> None:
    payload = json.dumps(
        record, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    )
    f.write(payload.encode("utf-8") + b"\n")


@dataclass
class TapeWriter:
    path: str | Path
    run_meta: dict[str, object] | None = None
    _file: BinaryIO | None = None

    def __enter__(self) -> "TapeWriter":
        if self._file is not None:
            raise SchemaError("tape already open")
        self._file = Path(self.path).open("wb")
        if self.run_meta is not None:
            if "type" in self.run_meta:
                raise SchemaError("run_meta cannot override type")
            _write_json_line(self._file, {"type": "header", **self.run_meta})
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _require_open(self) -> BinaryIO:
        if self._file is None:
            raise SchemaError("tape is not open")
        return self._file

    def record_quote(
        self,
        *,
        ts_ns: TsNs,
        round_id: int,
        scenario_id: str,
        estimate: float,
        bid: float,
        ask: float,
        qty: int,
    ) -> None:
        if round_id <= 0:
            raise SchemaError("round_id must be positive")
        _write_json_line(
            self._require_open(),
            {
                "type": "quote",
                "ts_ns": int(ts_ns),
                "round_id": round_id,
                "scenario_id": scenario_id,
                "estimate": estimate,
                "bid": bid,
                "ask": ask,
                "qty": qty,
            },
        )

    def record_fill(
        self,
        *,
        ts_ns: TsNs,
        round_id: int,
        side: Side,
        price: float,
        qty: int,
        fair: float,
    ) -> None:
        if round_id <= 0:
            raise SchemaError("round_id must be positive")
        if qty <= 0:
            raise SchemaError("qty must be positive")
        _write_json_line(
            self._require_open(),
            {
                "type": "fill",
                "ts_ns": int(ts_ns),
                "round_id": round_id,
                "side": side_name(side),
                "price": price,
                "qty": qty,
                "fair": fair,
            },
        )

    def record_pnl(
        self,
        *,
        ts_ns: TsNs,
        mark: float,
        cash: float,
        inventory: int,
        mtm: float,
        risk_adj: float,
    ) -> None:
        _write_json_line(
            self._require_open(),
            {
                "type": "pnl",
                "ts_ns": int(ts_ns),
                "mark": mark,
                "cash": cash,
                "inventory": inventory,
                "mtm": mtm,
                "risk_adj": risk_adj,
            },
        )
