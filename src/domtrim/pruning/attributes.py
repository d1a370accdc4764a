# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Attribute sanitization.

Strips attributes that carry framework plumbing rather than page content
(``data-*``, Angular ``ng*``, Alpine ``x-*``, ``xml*``, ``js*`` bridges,
``aria-*``, ``_private``, ``id``). The uid key, the attribute external
callers use to map model output back to DOM elements, survives every
rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lxml import etree

from domtrim.errors import InvalidTreeError
from domtrim.parser import is_element

logger = logging.getLogger(__name__)

DEFAULT_UID_KEY = "data-webtasks-id"


@dataclass(frozen=True, slots=True)
class SanitizeOptions:
    """Which removal rules are active. All on by default."""

    strip_data: bool = True
    strip_underscore: bool = True
    strip_framework_directives: bool = True
    strip_angular: bool = True
    strip_alpine: bool = True
    strip_xml: bool = True
    strip_js_bridge: bool = True
    strip_aria: bool = True
    strip_id: bool = True
    uid_key: str = DEFAULT_UID_KEY


@dataclass(frozen=True, slots=True)
class AttributeRule:
    """Match an attribute name by prefix, or exactly when ``exact`` is set."""

    option: str  # SanitizeOptions field gating this rule
    pattern: str
    exact: bool = False
    framework: bool = False  # also gated by strip_framework_directives

    def matches(self, name: str) -> bool:
        return name == self.pattern if self.exact else name.startswith(self.pattern)

    def enabled(self, options: SanitizeOptions) -> bool:
        if self.framework and not options.strip_framework_directives:
            return False
        return getattr(options, self.option)


RULES: tuple[AttributeRule, ...] = (
    AttributeRule("strip_underscore", "_"),
    AttributeRule("strip_angular", "ng", framework=True),
    AttributeRule("strip_alpine", "x-", framework=True),
    AttributeRule("strip_xml", "xml", framework=True),
    AttributeRule("strip_js_bridge", "js", framework=True),
    AttributeRule("strip_data", "data-"),
    AttributeRule("strip_aria", "aria-"),
    AttributeRule("strip_id", "id", exact=True),
)


def active_rules(options: SanitizeOptions) -> tuple[AttributeRule, ...]:
    return tuple(rule for rule in RULES if rule.enabled(options))


def should_strip(name: str, options: SanitizeOptions, rules: tuple[AttributeRule, ...] | None = None) -> bool:
    """True when attribute *name* is removed under *options*."""
    if name == options.uid_key:
        return False
    if rules is None:
        rules = active_rules(options)
    return any(rule.matches(name) for rule in rules)


def sanitize_attributes(root: etree._Element, options: SanitizeOptions | None = None) -> int:
    """Remove matching attributes from *root* and every descendant element.

    Returns the number of attributes removed.
    """
    if root is None:
        raise InvalidTreeError("sanitize_attributes")
    if options is None:
        options = SanitizeOptions()

    rules = active_rules(options)
    if not rules:
        return 0

    removed = 0
    for el in root.iter():
        if not is_element(el):
            continue
        doomed = [name for name in el.attrib if should_strip(name, options, rules)]
        for name in doomed:
            del el.attrib[name]
        removed += len(doomed)

    logger.debug("removed %d attributes", removed)
    return removed
