"""
Build trigger configurations from plain mappings or environment variables.

Environment layout (default prefix MYTRADER_):
    MYTRADER_SECURITY, MYTRADER_TRIGGER_LEVEL, MYTRADER_DIRECTION,
    MYTRADER_ORDER_SIDE, MYTRADER_ORDER_PRICE, MYTRADER_ORDER_VOLUME
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from mytrader.trigger import InvalidTriggerConfigError, TriggerConfig

ENV_PREFIX = "MYTRADER_"

FIELDS = ("security", "trigger_level", "direction", "order_side", "order_price", "order_volume")


def _parse_float(value: Any, key: str) -> float:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise InvalidTriggerConfigError(f"{key} is not a number: {value!r}") from None
    return value


def _parse_int(value: Any, key: str) -> int:
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidTriggerConfigError(f"{key} is not an integer: {value!r}") from None
    return value


def load_trigger_config(mapping: Mapping[str, Any]) -> TriggerConfig:
    """
    Build a TriggerConfig from a mapping with keys security, trigger_level,
    direction, order_side, order_price, order_volume. Numeric values may be
    strings. Missing keys raise InvalidTriggerConfigError.
    """
    missing = [k for k in FIELDS if k not in mapping]
    if missing:
        raise InvalidTriggerConfigError(f"missing trigger config keys: {', '.join(missing)}")
    return TriggerConfig(
        security=mapping["security"],
        trigger_level=_parse_float(mapping["trigger_level"], "trigger_level"),
        direction=mapping["direction"],
        order_side=mapping["order_side"],
        order_price=_parse_float(mapping["order_price"], "order_price"),
        order_volume=_parse_int(mapping["order_volume"], "order_volume"),
    )


def trigger_config_from_environment(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> TriggerConfig:
    """Read a TriggerConfig from <prefix><FIELD> variables (os.environ by default)."""
    env = os.environ if environ is None else environ
    values = {}
    for key in FIELDS:
        var = f"{prefix}{key.upper()}"
        if var in env:
            values[key] = env[var]
    missing = [f"{prefix}{k.upper()}" for k in FIELDS if k not in values]
    if missing:
        raise InvalidTriggerConfigError(f"missing environment variables: {', '.join(missing)}")
    return load_trigger_config(values)
