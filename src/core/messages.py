"""Operator-facing message catalogs (en/es).

Catalogs are built once per language and handed to the CLI handlers as an
immutable object; nothing reads them through module state.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from core.domain.language import Language

_ENGLISH: dict[str, str] = {
    "start.summary": "Start IMS resources.",
    "start.program.summary": "Start an IMS application program.",
    "start.program.status": "Start program defined to IMS",
    "start.program.success": "Program(s) {names} started.",
    "start.transaction.summary": "Start an IMS transaction.",
    "start.transaction.status": "Start transaction defined to IMS",
    "start.transaction.success": "Transaction(s) {names} started.",
    "start.region.summary": "Start an IMS message processing region.",
    "start.region.status": "Start region in IMS",
    "start.region.success": "Region start requested.",
    "stop.summary": "Stop IMS resources.",
    "stop.program.summary": "Stop an IMS application program.",
    "stop.program.status": "Stop program defined to IMS",
    "stop.program.success": "Program(s) {names} stopped.",
    "stop.transaction.summary": "Stop an IMS transaction.",
    "stop.transaction.status": "Stop transaction defined to IMS",
    "stop.transaction.success": "Transaction(s) {names} stopped.",
    "stop.region.summary": "Stop an IMS message processing region.",
    "stop.region.status": "Stop region in IMS",
    "stop.region.success": "Region stop requested.",
    "profile.created": "Saved IMS profile to: {path}",
    "profile.exists": "A profile already exists at {path}. Use --overwrite to replace it.",
    "errors.invalid_argument": "Invalid argument",
    "errors.remote": "Request to IMS failed",
    "errors.application": "IMS reported a failure",
}

_SPANISH: dict[str, str] = {
    "start.summary": "Arranca recursos de IMS.",
    "start.program.summary": "Arranca un programa de aplicación IMS.",
    "start.program.status": "Arrancando programa definido en IMS",
    "start.program.success": "Programa(s) {names} arrancado(s).",
    "start.transaction.summary": "Arranca una transacción IMS.",
    "start.transaction.status": "Arrancando transacción definida en IMS",
    "start.transaction.success": "Transacción(es) {names} arrancada(s).",
    "start.region.summary": "Arranca una región de proceso de mensajes IMS.",
    "start.region.status": "Arrancando región en IMS",
    "start.region.success": "Arranque de región solicitado.",
    "stop.summary": "Detiene recursos de IMS.",
    "stop.program.summary": "Detiene un programa de aplicación IMS.",
    "stop.program.status": "Deteniendo programa definido en IMS",
    "stop.program.success": "Programa(s) {names} detenido(s).",
    "stop.transaction.summary": "Detiene una transacción IMS.",
    "stop.transaction.status": "Deteniendo transacción definida en IMS",
    "stop.transaction.success": "Transacción(es) {names} detenida(s).",
    "stop.region.summary": "Detiene una región de proceso de mensajes IMS.",
    "stop.region.status": "Deteniendo región en IMS",
    "stop.region.success": "Parada de región solicitada.",
    "profile.created": "Perfil IMS guardado en: {path}",
    "profile.exists": "Ya existe un perfil en {path}. Usa --overwrite para reemplazarlo.",
    "errors.invalid_argument": "Argumento inválido",
    "errors.remote": "La petición a IMS falló",
    "errors.application": "IMS informó de un fallo",
}

_TABLES: dict[Language, dict[str, str]] = {
    Language.ENGLISH: _ENGLISH,
    Language.SPANISH: _SPANISH,
}


class MessageCatalog(Mapping[str, str]):
    """Read-only view over one language's templates.

    Keys missing from a translation fall back to English.
    """

    def __init__(self, language: Language, templates: Mapping[str, str]) -> None:
        self.language = language
        self._templates = MappingProxyType(dict(templates))

    def __getitem__(self, key: str) -> str:
        return self._templates[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def format(self, key: str, **values: Any) -> str:
        return self._templates[key].format(**values)


@lru_cache(maxsize=None)
def load_catalog(language: Language = Language.ENGLISH) -> MessageCatalog:
    templates = dict(_ENGLISH)
    templates.update(_TABLES.get(language, {}))
    return MessageCatalog(language, templates)
