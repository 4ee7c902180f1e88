from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
import logging
import math
from typing import Any

import numpy as np

from luvatrix_chart.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)


def force_num(value: Any, *, strict: bool = False) -> float:
    """Coerce a raw dataset value into a finite float.

    Anything that does not parse to a finite number becomes ``0.0``. With
    ``strict=True`` the same inputs raise ``ChartDataError`` instead.
    """

    out = _to_float(value)
    if out is None or not math.isfinite(out):
        if strict:
            raise ChartDataError(f"value is not a finite number: {value!r}")
        LOGGER.debug("absorbing non-numeric value %r as 0", value)
        return 0.0
    return out


def coerce_series(values: Any, *, strict: bool = False) -> tuple[float | None, ...]:
    """Ingest raw series values; ``None`` and NaN are kept as gaps."""

    raw = _as_list(values)
    out: list[float | None] = []
    for item in raw:
        if _is_gap(item):
            out.append(None)
            continue
        out.append(force_num(item, strict=strict))
    return tuple(out)


def _is_gap(item: Any) -> bool:
    if item is None:
        return True
    if isinstance(item, Decimal):
        return item.is_nan()
    if isinstance(item, (float, np.floating)):
        return bool(np.isnan(item))
    return False


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, np.integer, np.floating, Decimal)):
        try:
            return float(value)
        except (InvalidOperation, OverflowError, ValueError):
            # Integers beyond float range and signalling NaN decimals.
            return None
    if isinstance(value, (str, bytes)):
        text = value.decode("utf-8", "replace") if isinstance(value, bytes) else value
        text = text.strip()
        if not text:
            # Empty strings read as zero, the same as a missing value.
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def _as_list(values: Any) -> list[Any]:
    if torch is not None and isinstance(values, torch.Tensor):
        tensor = values.detach()
        if tensor.ndim != 1:
            raise ChartDataError("series values must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().tolist()

    if pd is not None and isinstance(values, pd.Series):
        return [None if _is_missing(v) else v for v in values.tolist()]

    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise ChartDataError("series values must be 1-D")
        return values.tolist()

    if isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        return list(values)

    raise ChartDataError(f"unsupported series input type: {type(values)!r}")


def _is_missing(value: Any) -> bool:
    if pd is None:
        return value is None
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
