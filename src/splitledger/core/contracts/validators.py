"""
JSON Schema Contract Validators

Модуль для валидации документов на границе с внешними системами
(хранилище записей, слой представления) согласно JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- expense_record.json (документ расхода из хранилища)
- settlement_record.json (документ взаиморасчёта из хранилища)
- transfer.json (упрощённый перевод)
- balance_view.json (ответ для экрана балансов группы)
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.validators import extend


# Записи из хранилища и model_dump() содержат tuple и не-dict mapping
_TYPE_CHECKER = Draft202012Validator.TYPE_CHECKER.redefine_many(
    {
        "array": lambda checker, instance: isinstance(instance, (list, tuple)),
        "object": lambda checker, instance: isinstance(instance, Mapping),
    }
)

LedgerValidator = extend(Draft202012Validator, type_checker=_TYPE_CHECKER)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'expense_record')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = LedgerValidator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """
        Человекочитаемые сообщения всех ошибок валидации.

        Каждое сообщение начинается с JSON-пути до поля ('$' — корень).
        Ошибки отсортированы по пути, чтобы сообщение было детерминированным.
        """
        errors = sorted(self.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{e.json_path}: {e.message}" for e in errors]


class ExpenseRecordValidator(ContractValidator):
    """Валидатор для expense_record контракта."""

    def __init__(self):
        super().__init__("expense_record")


class SettlementRecordValidator(ContractValidator):
    """Валидатор для settlement_record контракта."""

    def __init__(self):
        super().__init__("settlement_record")


class TransferValidator(ContractValidator):
    """Валидатор для transfer контракта."""

    def __init__(self):
        super().__init__("transfer")


class BalanceViewValidator(ContractValidator):
    """Валидатор для balance_view контракта."""

    def __init__(self):
        super().__init__("balance_view")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_expense_record(data: Dict[str, Any]) -> None:
    """
    Валидация документа расхода.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ExpenseRecordValidator().validate(data)


def validate_settlement_record(data: Dict[str, Any]) -> None:
    """
    Валидация документа взаиморасчёта.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SettlementRecordValidator().validate(data)


def validate_transfer(data: Dict[str, Any]) -> None:
    """
    Валидация упрощённого перевода.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    TransferValidator().validate(data)


def validate_balance_view(data: Dict[str, Any]) -> None:
    """
    Валидация ответа экрана балансов.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BalanceViewValidator().validate(data)
