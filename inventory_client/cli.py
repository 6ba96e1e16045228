"""Console front end.

Usage::

    inventory-client login --email ana@example.com
    inventory-client list customers --recent 5
    inventory-client search addresses Paulista --field rua
    inventory-client add-supplier --cnpj 11.222.333/0001-81 --legal-name "Cestas ME" \\
        --contact-name Ana --phone "(11) 4002-8922"
    inventory-client import addresses enderecos.csv
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import Any, Iterable, TextIO

from inventory_client.app import InventoryApp
from inventory_client.config import ClientConfig
from inventory_client.exceptions import ConfigurationError, InventoryClientError
from inventory_client.importer import ImportReport
from inventory_client.logging import setup_logging
from inventory_client.models.enums import NoticeLevel, Page
from inventory_client.normalizers import format_cnpj, format_cpf, format_phone, format_postal_code
from inventory_client.notices import Notice
from inventory_client.samples import SampleDrafts
from inventory_client.serialization import to_dict

logger = logging.getLogger(__name__)

ENTITY_PAGES: dict[str, Page] = {
    "addresses": Page.ADDRESSES,
    "customers": Page.CUSTOMERS,
    "suppliers": Page.SUPPLIERS,
    "products": Page.ITEMS,
    "materials": Page.ITEMS,
    "phones": Page.PHONES,
}

ADD_COMMANDS: dict[str, str] = {
    "add-address": "addresses",
    "add-customer": "customers",
    "add-supplier": "suppliers",
    "add-product": "products",
    "add-material": "materials",
    "add-phone": "phones",
}

# argparse dest -> draft field, per add command
ADD_FIELDS: dict[str, tuple[str, ...]] = {
    "addresses": ("street", "number", "postal_code", "district"),
    "customers": ("name", "birth_date", "email", "cpf", "cnpj", "address_id", "phone"),
    "suppliers": ("cnpj", "legal_name", "contact_name", "email", "phone", "address_id"),
    "products": (
        "code",
        "name",
        "description",
        "category",
        "quantity",
        "price",
        "supplier_id",
        "image_url",
    ),
    "materials": (
        "name",
        "type",
        "cost",
        "expiry_date",
        "description",
        "size",
        "material",
        "accessory",
        "image_url",
    ),
    "phones": ("area_code", "number", "customer_id", "country_code"),
}

# Backend search field names
SEARCH_FIELDS = ("cep", "id", "numero", "rua")

NOTICE_PREFIX = {
    NoticeLevel.INFO: "i",
    NoticeLevel.SUCCESS: "+",
    NoticeLevel.WARNING: "!",
    NoticeLevel.ERROR: "x",
}


class ConsoleView:
    """Render entity lists and notices as plain text."""

    def __init__(self, recent: int = 10, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.recent = recent
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def show_notice(self, notice: Notice) -> None:
        stream = self.err if notice.level in (NoticeLevel.WARNING, NoticeLevel.ERROR) else self.out
        print(f"[{NOTICE_PREFIX[notice.level]}] {notice.message}", file=stream)

    def show_error(self, message: str) -> None:
        print(f"[x] {message}", file=self.err)

    def render_list(self, entity: str, records: Iterable[Any], total: int | None = None) -> None:
        """Print ``records`` as given, noting how many of ``total`` were left out."""
        records = list(records)
        total = len(records) if total is None else total
        print(f"\n{'=' * 60}", file=self.out)
        print(f"{entity.capitalize()} ({total} records)", file=self.out)
        print("=" * 60, file=self.out)

        for record in records:
            print(self._line(entity, record), file=self.out)

        if total > len(records):
            print(f"... and {total - len(records)} more", file=self.out)

    def render_record(self, entity: str, record: Any) -> None:
        print(self._line(entity, record), file=self.out)

    def render_report(self, report: ImportReport) -> None:
        print(
            f"{report.entity}: {report.total} rows, {report.created} created, {report.skipped} skipped, "
            f"{len(report.failed)} failed",
            file=self.out,
        )
        for row, message in report.failed:
            print(f"  row {row}: {message}", file=self.out)

    def render_status(self, app: InventoryApp) -> None:
        state = "logged in" if app.is_authenticated() else "logged out"
        print(f"Session: {state}", file=self.out)
        print(f"API: {app.client.base_url}", file=self.out)
        if app.is_authenticated():
            counts = ", ".join(f"{name} {count}" for name, count in app.stores.summary().items())
            print(f"Loaded: {counts}", file=self.out)

    def _line(self, entity: str, record: Any) -> str:
        data = self._display(entity, to_dict(record))
        identifier = data.pop("id", None)
        fields = ", ".join(f"{key}={value}" for key, value in data.items() if value not in (None, ""))
        return f"#{identifier if identifier is not None else '-'} {fields}"

    def _display(self, entity: str, data: dict[str, Any]) -> dict[str, Any]:
        """Apply display formatting to identifier and contact fields."""
        if data.get("cpf"):
            data["cpf"] = format_cpf(data["cpf"])
        if data.get("cnpj"):
            data["cnpj"] = format_cnpj(data["cnpj"])
        if data.get("postal_code"):
            data["postal_code"] = format_postal_code(data["postal_code"])
        if entity == "suppliers" and data.get("phone"):
            data["phone"] = format_phone(data["phone"])
        if entity == "phones":
            digits = f"{data.pop('area_code', '')}{data.pop('number', '')}"
            data["phone"] = format_phone(digits, data.pop("country_code", None) or "55")
        return data


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-client",
        description="Manage the basket-shop inventory from the command line",
    )
    parser.add_argument("--api-base", help="Override the backend base URL")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the access token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    commands.add_parser("logout", help="Forget the stored access token")
    commands.add_parser("status", help="Show session state and backend URL")

    list_cmd = commands.add_parser("list", help="List records, newest first")
    list_cmd.add_argument("entity", choices=sorted(ENTITY_PAGES))
    list_cmd.add_argument("--recent", type=non_negative_int, help="How many records to show")

    search = commands.add_parser("search", help="Search records on the backend, falling back to the local list")
    search.add_argument("entity", choices=["addresses"])
    search.add_argument("term")
    search.add_argument("--field", choices=SEARCH_FIELDS, help="Match a single field")

    address = commands.add_parser("add-address", help="Register an address")
    address.add_argument("--street")
    address.add_argument("--number")
    address.add_argument("--postal-code", dest="postal_code")
    address.add_argument("--district")

    customer = commands.add_parser("add-customer", help="Register a customer")
    customer.add_argument("--name")
    customer.add_argument("--birth-date", dest="birth_date", help="dd/mm/yyyy or yyyy-mm-dd")
    customer.add_argument("--email")
    customer.add_argument("--cpf")
    customer.add_argument("--cnpj")
    customer.add_argument("--address-id", dest="address_id")
    customer.add_argument("--phone", help="Also registers the phone for the new customer")

    supplier = commands.add_parser("add-supplier", help="Register a supplier")
    supplier.add_argument("--cnpj")
    supplier.add_argument("--legal-name", dest="legal_name")
    supplier.add_argument("--contact-name", dest="contact_name")
    supplier.add_argument("--email")
    supplier.add_argument("--phone")
    supplier.add_argument("--address-id", dest="address_id")

    product = commands.add_parser("add-product", help="Register a product")
    product.add_argument("--code")
    product.add_argument("--name")
    product.add_argument("--description")
    product.add_argument("--category", choices=["produto", "catalogo", "combo"])
    product.add_argument("--quantity")
    product.add_argument("--price")
    product.add_argument("--supplier-id", dest="supplier_id")
    product.add_argument("--image-url", dest="image_url")
    product.add_argument("--image", help="Local image file to upload")

    material = commands.add_parser("add-material", help="Register a raw material")
    material.add_argument("--name")
    material.add_argument("--type", choices=["componente", "insumo", "embalagem"])
    material.add_argument("--cost")
    material.add_argument("--expiry-date", dest="expiry_date")
    material.add_argument("--description")
    material.add_argument("--size")
    material.add_argument("--material")
    material.add_argument("--accessory")
    material.add_argument("--image-url", dest="image_url")
    material.add_argument("--image", help="Local image file to upload")

    phone = commands.add_parser("add-phone", help="Register a customer phone")
    phone.add_argument("--area-code", dest="area_code")
    phone.add_argument("--number")
    phone.add_argument("--customer-id", dest="customer_id")
    phone.add_argument("--country-code", dest="country_code")

    for name in ADD_COMMANDS:
        commands.choices[name].add_argument(
            "--sample",
            action="store_true",
            help="Start from a realistic generated draft; given options override it",
        )
        commands.choices[name].add_argument("--seed", type=int, help="Seed for --sample")

    import_cmd = commands.add_parser("import", help="Bulk import rows from a JSON or CSV file")
    import_cmd.add_argument("entity", choices=["addresses", "suppliers", "customers"])
    import_cmd.add_argument("file")

    return parser


def _draft_fields(entity: str, args: argparse.Namespace) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if getattr(args, "sample", False):
        references = {
            "customers": "address_id",
            "suppliers": "address_id",
            "phones": "customer_id",
            "products": "supplier_id",
        }
        reference = references.get(entity)
        kwargs = {reference: getattr(args, reference)} if reference else {}
        sample = SampleDrafts(seed=args.seed).draft_for(entity, **kwargs)
        fields.update(vars(sample))
    for name in ADD_FIELDS[entity]:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    return fields


async def _add(app: InventoryApp, view: ConsoleView, entity: str, args: argparse.Namespace) -> int:
    if not await app.navigate(ENTITY_PAGES[entity]):
        return 1

    fields = _draft_fields(entity, args)
    image = getattr(args, "image", None)
    if image:
        fields["image_url"] = await app.uploader.upload(image)

    form = app.forms[entity]
    form.reset()
    form.update(**fields)
    created = await form.submit()
    if created:
        view.render_record(entity, form.last_created)
    latest = app.notices.latest
    if form.error and (latest is None or latest.message != form.error):
        view.show_error(form.error)
    return 0 if created and not form.error else 1


async def run(args: argparse.Namespace, app: InventoryApp, view: ConsoleView) -> int:
    """Execute one parsed command against ``app``."""
    if args.command == "login":
        password = args.password or getpass.getpass("Password: ")
        return 0 if await app.login(args.email, password) else 1

    if args.command == "logout":
        app.logout()
        return 0

    if args.command == "status":
        if app.check_activity():
            await app.start()
        view.render_status(app)
        return 0

    if args.command == "list":
        if not await app.navigate(ENTITY_PAGES[args.entity]):
            return 1
        repository = app.stores.get(args.entity)
        limit = view.recent if args.recent is None else args.recent
        view.render_list(args.entity, repository.recent(limit), total=len(repository))
        return 0

    if args.command == "search":
        if not await app.navigate(ENTITY_PAGES[args.entity]):
            return 1
        found = await app.stores.addresses.search_remote(args.term, args.field)
        view.render_list(args.entity, found)
        return 0

    if args.command == "import":
        if not await app.navigate(ENTITY_PAGES[args.entity]):
            return 1
        report = await app.importer.import_file(args.entity, args.file)
        view.render_report(report)
        return 0 if not report.failed else 1

    return await _add(app, view, ADD_COMMANDS[args.command], args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ClientConfig.from_env()
    except ConfigurationError as exc:
        parser.error(str(exc))
    if args.api_base:
        config.api.override = args.api_base

    setup_logging(args.log_level or config.log_level, args.log_format)

    app = InventoryApp(config)
    view = ConsoleView(recent=config.display.recent)
    app.notices.subscribe(view.show_notice)
    try:
        return asyncio.run(run(args, app, view))
    except InventoryClientError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        view.show_error(str(exc))
        return 1
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
