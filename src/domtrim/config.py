# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Pipeline settings, with an environment-variable loader.

Every knob is a named field; ``CleanSettings()`` reproduces the default
pipeline (all attribute rules on, bracket notation, no trailing note, no
title line).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from domtrim.pruning.attributes import DEFAULT_UID_KEY, SanitizeOptions

ENV_PREFIX = "DOMTRIM_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})

# env suffix → SanitizeOptions field
_SANITIZE_ENV_FLAGS = {
    "STRIP_DATA": "strip_data",
    "STRIP_UNDERSCORE": "strip_underscore",
    "STRIP_FRAMEWORK_DIRECTIVES": "strip_framework_directives",
    "STRIP_ARIA": "strip_aria",
    "STRIP_ID": "strip_id",
}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name}: expected a boolean (1/0, true/false, yes/no, on/off), got {raw!r}")


@dataclass(frozen=True, slots=True)
class CleanSettings:
    """Settings for :func:`domtrim.pruning.pipeline.clean`."""

    sanitize: SanitizeOptions = field(default_factory=SanitizeOptions)
    use_bracket_notation: bool = True
    trailing_note: str | None = None
    include_title: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CleanSettings:
        """Build settings from ``DOMTRIM_*`` variables; unset ones keep defaults.

        Raises:
            ValueError: a boolean variable has an unrecognized value.
        """
        env = os.environ if environ is None else environ

        sanitize_kwargs: dict = {}
        for suffix, attr in _SANITIZE_ENV_FLAGS.items():
            key = ENV_PREFIX + suffix
            if key in env:
                sanitize_kwargs[attr] = _parse_bool(key, env[key])
        uid_key = env.get(ENV_PREFIX + "UID_KEY", "").strip()
        sanitize_kwargs["uid_key"] = uid_key or DEFAULT_UID_KEY

        settings = cls(sanitize=SanitizeOptions(**sanitize_kwargs))

        bracket_key = ENV_PREFIX + "BRACKET_NOTATION"
        if bracket_key in env:
            settings = replace(settings, use_bracket_notation=_parse_bool(bracket_key, env[bracket_key]))
        title_key = ENV_PREFIX + "INCLUDE_TITLE"
        if title_key in env:
            settings = replace(settings, include_title=_parse_bool(title_key, env[title_key]))
        note = env.get(ENV_PREFIX + "TRAILING_NOTE")
        if note:
            settings = replace(settings, trailing_note=note)
        return settings
