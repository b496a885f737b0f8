"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating loaders, formatters and call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import Any

__all__ = [
    "LocaleCode",
    "LocaleMessages",
    "MessageCatalog",
    "MessageData",
    "MessageId",
    "Template",
]

type MessageId = str
"""Dot-delimited message identifier (e.g., 'messages.greeting')."""

type LocaleCode = str
"""Locale code as spelled by loaders (e.g., 'en', 'fr', 'pt-BR')."""

type Template = str
"""Raw message template, generally ICU MessageFormat."""

type LocaleMessages = Mapping[MessageId, Template]
"""Templates of one locale keyed by message identifier."""

type MessageCatalog = Mapping[LocaleCode, LocaleMessages]
"""Locale code to templates; what loaders return and what the store holds."""

type MessageData = Mapping[str, Any]
"""Values interpolated into a template (e.g., {'name': 'Anna', 'count': 3})."""
