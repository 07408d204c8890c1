from __future__ import annotations

from typing import Dict, MutableMapping

CONTROL_KEY = "control"

_DISABLED_BACKGROUND = (
    "EditorPane",
    "FormattedTextField",
    "PasswordField",
    "TextArea",
    "TextField",
    "TextPane",
    "Spinner",
)
_INACTIVE_BACKGROUND = ("TextArea", "TextPane", "EditorPane")


def control_default_keys() -> Dict[str, str]:
    """Keys that take the base ``control`` colour, mapped to that source key."""
    keys = {f"{name}.disabledBackground": CONTROL_KEY for name in _DISABLED_BACKGROUND}
    keys.update(
        {f"{name}.inactiveBackground": CONTROL_KEY for name in _INACTIVE_BACKGROUND}
    )
    keys["Spinner.disabledForeground"] = CONTROL_KEY
    return keys


def apply_control_defaults(defaults: MutableMapping[str, object]) -> int:
    """Copy the base ``control`` value onto disabled/inactive text component keys."""
    if CONTROL_KEY not in defaults:
        return 0
    control = defaults[CONTROL_KEY]
    keys = control_default_keys()
    for key in keys:
        defaults[key] = control
    return len(keys)
