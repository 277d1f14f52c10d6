"""Simple internationalization (i18n) infrastructure.

Goals:
 - Translation registry with locale switch & fallback to the default locale.
 - String interpolation via ``str.format`` with named placeholders.
 - ``TranslationService`` object handed to categories (``translate(key)``)
   with change listeners so the tree can be retranslated on locale switch.

Design decisions / assumptions:
 - A *default locale* (``_DEFAULT_LOCALE``) always exists (``"en"``) and is consulted as fallback.
 - Missing key after fallback returns the key itself rather than raising, so an
   untranslated category still shows its raw description.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

__all__ = [
    "register_catalog",
    "set_locale",
    "get_locale",
    "t",
    "translate",
    "TranslationService",
]

_logger = logging.getLogger(__name__)

_DEFAULT_LOCALE = "en"
_current_locale = _DEFAULT_LOCALE

_catalogs: Dict[str, Dict[str, str]] = {}


def register_catalog(locale: str, catalog: Dict[str, str]) -> None:
    """Register or extend a catalog for a locale.

    Existing keys are updated (last registration wins). Empty catalogs allowed.
    """
    existing = _catalogs.setdefault(locale, {})
    existing.update(catalog)


def set_locale(locale: str) -> None:
    global _current_locale
    _current_locale = locale


def get_locale() -> str:
    return _current_locale


def _lookup(locale: str, key: str) -> Optional[str]:
    catalog = _catalogs.get(locale)
    if not catalog:
        return None
    return catalog.get(key)


def _resolve(locale: str, key: str) -> str:
    text = _lookup(locale, key)
    if text is None and locale != _DEFAULT_LOCALE:
        text = _lookup(_DEFAULT_LOCALE, key)
    if text is None:
        text = key  # final fallback
    return text


def translate(key: str, **variables: Any) -> str:
    """Translate a key using the current locale with fallback.

    Variables are interpolated using ``str.format``. Missing variables raise ``KeyError``
    to surface programmer error.
    """
    text = _resolve(_current_locale, key)
    if not variables:
        return text
    try:
        return text.format(**variables)
    except KeyError as e:
        raise KeyError(f"Missing interpolation variable {e.args[0]!r} for key '{key}'") from e


# Short alias commonly used in UI code.
t = translate


class TranslationService:
    """Translator bound to a locale, as consumed by ``Category.translate``.

    ``locale=None`` follows the module-wide current locale. Listeners are
    called with the new locale after ``set_locale`` changed it.
    """

    def __init__(self, locale: Optional[str] = None) -> None:
        self._locale = locale
        self._listeners: List[Callable[[str], Any]] = []

    @property
    def locale(self) -> str:
        return self._locale or _current_locale

    def translate(self, key: str) -> str:
        return _resolve(self.locale, key)

    def set_locale(self, locale: str) -> None:
        if locale == self._locale:
            return
        self._locale = locale
        _logger.debug("Translation locale switched to %s", locale)
        for listener in list(self._listeners):
            listener(locale)

    def subscribe(self, listener: Callable[[str], Any]) -> Callable[[], None]:
        """Register ``listener``; returns a callable removing it again."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove
