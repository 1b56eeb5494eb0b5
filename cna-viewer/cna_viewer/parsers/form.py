"""Parse the model parameter form into CNAParameters."""
from __future__ import annotations

import math
import re
from typing import Any, Mapping

from cna_viewer.models import CNAParameters

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_float(value: Any) -> float:
    """Leading-number float parse; NaN when nothing numeric leads."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    m = _FLOAT_PREFIX.match(str(value)) if value is not None else None
    return float(m.group(1)) if m else math.nan


def parse_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value)) if value is not None else None
    return int(m.group(1)) if m else None


def parse_copy_numbers(text: str | list | tuple) -> list[int]:
    items = text if isinstance(text, (list, tuple)) else str(text).split(",")
    values = [parse_float(item) for item in items]
    values = [v for v in values if not math.isnan(v)]
    if not values:
        raise ValueError("No valid copy numbers found")
    if any(v < 0 or not v.is_integer() for v in values):
        raise ValueError(f"Copy numbers must be non-negative whole numbers: {values}")
    return [int(v) for v in values]


def parse_form(form: Mapping[str, Any]) -> CNAParameters:
    """Validate form fields: purity, tumorPloidy, normalPloidy, copyNumbers.

    Snake-case keys (tumor_ploidy, normal_ploidy, copy_numbers) work too.
    """
    if not isinstance(form, Mapping):
        raise ValueError("Invalid form data")

    def field(camel: str, snake: str) -> Any:
        return form.get(camel, form.get(snake))

    purity = parse_float(form.get("purity"))
    tumor_ploidy = parse_float(field("tumorPloidy", "tumor_ploidy"))
    normal_ploidy = parse_int(field("normalPloidy", "normal_ploidy"))

    if math.isnan(purity) or math.isnan(tumor_ploidy) or normal_ploidy is None:
        raise ValueError("Invalid numeric data")

    copy_numbers = parse_copy_numbers(field("copyNumbers", "copy_numbers") or "")

    return CNAParameters(
        purity=purity,
        ploidy=tumor_ploidy,
        copy_numbers=copy_numbers,
        normal_ploidy=normal_ploidy,
    )
