from __future__ import annotations

from argparse import Namespace

from ...core.errors import ConfigError, CyclicReferenceError, LoadError
from ...core.global_overrides import GLOBAL_PREFIX, expand_globals, key_suffix
from ...core.logger import get_logger
from ...core.resolver import VariableResolver
from ._engine import engine_from_args

log = get_logger(__name__)


def run(args: Namespace) -> int:
    try:
        engine = engine_from_args(args)
        raw = engine.raw_properties(args.theme)
    except (ConfigError, LoadError) as exc:
        log.error(str(exc))
        return 1

    key = args.key
    if key not in raw:
        print(f"{key}: not defined by {engine.identity_for(args.theme)}")
        return 1

    print(f"{key} = {raw[key]}")
    depth = engine.config.max_reference_depth
    try:
        # Globals resolve over the raw set, everything else over the expanded one
        props = raw
        if not key.startswith(GLOBAL_PREFIX):
            props, globals_ = expand_globals(raw, VariableResolver(raw, max_depth=depth))
            suffix = key_suffix(key)
            if suffix is not None and suffix in globals_:
                global_key = f"{GLOBAL_PREFIX}{suffix}"
                print(f"  overridden by {global_key} = {raw[global_key]}")

        resolver = VariableResolver(props, max_depth=depth)
        value = props[key]
        for step in resolver.explain(value):
            print(f"  -> {step} = {props[step]}")

        table = engine.defaults(args.theme)
    except CyclicReferenceError as exc:
        print(f"  !! {exc}")
        return 1

    if key in table:
        print(f"  => {table[key]!r}")
    else:
        print(f"  => {resolver.resolve(value)!r} (declaration, not a styling key)")
    return 0
