from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, Optional

from ...core.errors import ConfigError, CyclicReferenceError
from ...core.logger import get_logger
from ._engine import engine_from_args

log = get_logger(__name__)


def _load_base(path: Optional[str]) -> Optional[Dict[str, Any]]:
    if not path:
        return None
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read base defaults {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Base defaults {path} must contain a JSON object")
    return data


def run(args: Namespace) -> int:
    try:
        engine = engine_from_args(args)
        base = _load_base(args.base)
        table = engine.defaults(args.theme, base)
    except (ConfigError, CyclicReferenceError) as exc:
        log.error(str(exc))
        return 1

    values = table.to_python()
    if args.prefix:
        values = {k: v for k, v in values.items() if k.startswith(args.prefix)}

    if args.json:
        print(json.dumps(values, indent=2 if args.pretty else None, sort_keys=True))
    else:
        resolved = table.resolved()
        for key in sorted(values):
            value = resolved.get(key)
            kind = value.kind.value if value is not None else "base"
            print(f"{key} = {values[key]}  [{kind}]")

    if table.fallback:
        log.warning("Theme %s could not be loaded; base defaults returned", args.theme)
        return 1
    return 0
