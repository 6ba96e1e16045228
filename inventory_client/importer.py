"""Bulk import of addresses, suppliers and customers from JSON or CSV.

Rows go through the same form controllers as interactive input, one at a
time, so validation, duplicate checks and notices behave identically.

Usage::

    importer = BulkImporter({"addresses": address_form})
    report = await importer.import_file("addresses", "enderecos.csv")
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from inventory_client.exceptions import StorageError, ValidationError
from inventory_client.forms.base import FormController

logger = logging.getLogger(__name__)

DELIMITERS = ",;\t"

# Draft field -> accepted column names (draft name first, then wire key)
COLUMN_ALIASES: dict[str, dict[str, tuple[str, ...]]] = {
    "addresses": {
        "street": ("street", "rua"),
        "number": ("number", "numero"),
        "postal_code": ("postal_code", "cep"),
        "district": ("district", "bairro"),
    },
    "suppliers": {
        "cnpj": ("cnpj",),
        "legal_name": ("legal_name", "razaoSocial", "razao_social"),
        "contact_name": ("contact_name", "contato"),
        "email": ("email",),
        "phone": ("phone", "telefone"),
        "address_id": ("address_id", "enderecoId", "endereco_id"),
    },
    "customers": {
        "name": ("name", "nome"),
        "birth_date": ("birth_date", "dataNascimento", "data_nascimento"),
        "email": ("email",),
        "cpf": ("cpf",),
        "cnpj": ("cnpj",),
        "address_id": ("address_id", "enderecoId", "endereco_id"),
        "phone": ("phone", "telefone"),
    },
}

REQUIRED_COLUMNS: dict[str, tuple[str, ...]] = {
    "addresses": ("street", "number", "postal_code"),
    "suppliers": ("cnpj", "legal_name"),
    "customers": ("name", "address_id"),
}


@dataclass
class ImportReport:
    """Outcome of one import run."""

    entity: str
    created: int = 0
    skipped: int = 0
    failed: list[tuple[int, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.created + self.skipped + len(self.failed)


def parse_rows(text: str) -> list[dict[str, Any]]:
    """Read rows from a JSON array, a ``{"data": [...]}`` object or delimited text.

    Raises
    ------
    ValidationError
        If no rows can be read.
    """
    content = (text or "").strip()
    if not content:
        raise ValidationError("The import file is empty.")

    if content[0] in "[{":
        try:
            data = json.loads(content)
        except ValueError as exc:
            raise ValidationError(f"Invalid JSON: {exc}") from exc
        if isinstance(data, dict):
            data = data.get("data", [])
        rows = [row for row in data if isinstance(row, dict)] if isinstance(data, list) else []
    else:
        header = content.splitlines()[0]
        delimiter = max(DELIMITERS, key=header.count)
        reader = csv.DictReader(io.StringIO(content), delimiter=delimiter)
        rows = [
            {key.strip(): (value or "").strip() for key, value in row.items() if key is not None}
            for row in reader
        ]

    if not rows:
        raise ValidationError("No rows found in the import file.")
    return rows


def map_row(entity: str, row: dict[str, Any]) -> dict[str, Any]:
    """Translate a row's columns to draft field names, dropping unknown ones."""
    aliases = COLUMN_ALIASES[entity]
    mapped: dict[str, Any] = {}
    for field_name, columns in aliases.items():
        for column in columns:
            value = row.get(column)
            if value not in (None, ""):
                mapped[field_name] = value if isinstance(value, str) else str(value)
                break
    return mapped


class BulkImporter:
    """Feed parsed rows through form controllers, sequentially."""

    def __init__(self, forms: dict[str, FormController]) -> None:
        unknown = set(forms) - set(COLUMN_ALIASES)
        if unknown:
            raise ValueError(f"Import not supported for: {', '.join(sorted(unknown))}")
        self.forms = forms

    async def import_rows(self, entity: str, rows: list[dict[str, Any]]) -> ImportReport:
        form = self.forms.get(entity)
        if form is None:
            raise ValidationError(f"Import not supported for {entity}.")

        report = ImportReport(entity=entity)
        required = REQUIRED_COLUMNS[entity]
        for index, row in enumerate(rows, start=1):
            fields = map_row(entity, row)
            if any(name not in fields for name in required):
                report.skipped += 1
                logger.debug("Row %d of %s skipped: missing required columns", index, entity)
                continue

            form.reset()
            form.update(**fields)
            if await form.submit():
                report.created += 1
            else:
                report.failed.append((index, form.error or "Unknown error"))

        logger.info(
            "Imported %s: %d created, %d skipped, %d failed",
            entity,
            report.created,
            report.skipped,
            len(report.failed),
        )
        return report

    async def import_text(self, entity: str, text: str) -> ImportReport:
        return await self.import_rows(entity, parse_rows(text))

    async def import_file(self, entity: str, path: str | Path) -> ImportReport:
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise StorageError(f"Could not read {path}: {exc}") from exc
        return await self.import_text(entity, text)
