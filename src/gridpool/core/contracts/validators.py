"""
JSON Schema контракты границы RoundController ↔ presentation layer.

Схемы поставляются внутри пакета (gridpool/core/contracts/schema/*.json)
и читаются через importlib.resources, поэтому работают одинаково из
checkout, editable install и собранного wheel.

Схемы:
- round_event.json: все события RoundController (oneOf по event_type)
- round_snapshot.json: queryable снапшот состояния
"""

import json
from functools import lru_cache
from importlib.resources import files
from typing import Any, Dict, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_PACKAGE = __package__
SCHEMA_SUBDIR = "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Ленивый загрузчик схем из ресурсов пакета.

    Схема читается и проходит meta-validation при первом обращении,
    затем берётся из кэша.
    """

    def __init__(self, package: Optional[str] = None, subdir: str = SCHEMA_SUBDIR):
        self._root = files(package or SCHEMA_PACKAGE) / subdir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def root(self):
        return self._root

    def available(self) -> List[str]:
        """Имена схем (без .json), поставляемых с пакетом."""
        return sorted(
            entry.name[: -len(".json")]
            for entry in self._root.iterdir()
            if entry.name.endswith(".json")
        )

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: имя схемы без расширения (например, 'round_event')

        Raises:
            FileNotFoundError: Если схема не поставляется с пакетом
            ValueError: Если файл не является валидной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        resource = self._root / f"{schema_name}.json"
        if not resource.is_file():
            raise FileNotFoundError(
                f"Schema not found: {schema_name}.json (available: {self.available()})"
            )

        schema = json.loads(resource.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка данных против одной схемы пакета."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """Сообщения всех ошибок в виде 'path: message' (для логов и UI)."""
        messages = []
        errors = sorted(
            self.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]
        )
        for error in errors:
            location = "/".join(str(part) for part in error.absolute_path) or "<root>"
            messages.append(f"{location}: {error.message}")
        return messages


class RoundEventValidator(ContractValidator):
    schema_name = "round_event"


class RoundSnapshotValidator(ContractValidator):
    schema_name = "round_snapshot"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


@lru_cache(maxsize=None)
def _event_validator() -> RoundEventValidator:
    return RoundEventValidator()


@lru_cache(maxsize=None)
def _snapshot_validator() -> RoundSnapshotValidator:
    return RoundSnapshotValidator()


def validate_round_event(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Если событие не соответствует контракту
    """
    _event_validator().validate(data)


def validate_round_snapshot(data: Dict[str, Any]) -> None:
    """
    Raises:
        jsonschema.ValidationError: Если снапшот не соответствует контракту
    """
    _snapshot_validator().validate(data)
