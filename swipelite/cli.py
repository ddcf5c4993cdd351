"""
SwipeLite command line.

Usage:
    swipelite invoices                 List stored invoices
    swipelite show INV-123456          Show one invoice with totals
    swipelite tally INV-123456         Write the Tally XML voucher
    swipelite pdf INV-123456           Write the invoice PDF
    swipelite print INV-123456         Write the printable HTML sheet
    swipelite parse "2 coffee to Ravi" Draft an invoice from free text
    swipelite stats                    Dashboard totals (and AI insights)
    swipelite status                   Storage and LLM status

Invoices can be referred to by invoice number or by id.
"""

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog

from swipelite import __version__
from swipelite.application import (
    AppState,
    BusinessInsightsUseCase,
    ExportPdfUseCase,
    ExportTallyUseCase,
    ParseSmartBillUseCase,
    PrintInvoiceUseCase,
    SaveInvoiceUseCase,
    open_state,
)
from swipelite.config import configure_logging, get_settings
from swipelite.core.entities import Invoice
from swipelite.core.exceptions import SwipeLiteError
from swipelite.core.services import compute_dashboard_stats


class CommandError(Exception):
    """Reported to the user as ``Error: ...`` with exit status 1."""


def _money(value: float) -> str:
    return f"{get_settings().billing.currency_symbol}{value:,.2f}"


def _resolve_invoice(state: AppState, ref: str) -> Invoice:
    invoice = state.find_invoice(ref) or state.get_invoice(ref)
    if invoice is None:
        raise CommandError(f"No invoice with number or id '{ref}'")
    return invoice


def _write(output_dir: Path, filename: str, content: str | bytes) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_invoices(state: AppState, args: argparse.Namespace) -> None:
    invoices = state.invoices
    if not invoices:
        print("No invoices yet.")
        return
    for inv in invoices[: args.limit]:
        customer = state.get_customer(inv.customer_id)
        name = customer.name if customer else "(deleted customer)"
        print(
            f"{inv.invoice_number:<14} {inv.date:%Y-%m-%d}  {name:<24} "
            f"{_money(inv.grand_total):>14}  {inv.status.value}"
        )


async def cmd_show(state: AppState, args: argparse.Namespace) -> None:
    document = state.assemble_for_invoice(_resolve_invoice(state, args.invoice))
    print(f"{document.invoice_number}  {document.date:%Y-%m-%d}  [{document.status.value}]")
    print(f"From:     {document.seller.name}")
    print(f"Bill to:  {'Customer not selected' if document.customer.missing else document.customer.name}")
    print(f"Template: {document.template_name} ({document.paper.format.value})")
    for f in document.slots.all():
        print(f"  {f.label}: {f.value}")
    print()
    for line in document.lines:
        print(f"  {line.index:>2}. {line.name:<30} {line.quantity:>4} x {_money(line.price):>12} = {_money(line.amount):>12}")
        for label, value in line.details:
            print(f"        {label}: {value}")
    print()
    print(f"  Subtotal:    {_money(document.totals.subtotal):>14}")
    print(f"  GST ({document.tax_rate * 100:g}%):   {_money(document.totals.tax_total):>14}")
    print(f"  Grand Total: {_money(document.totals.grand_total):>14}")


async def cmd_tally(state: AppState, args: argparse.Namespace) -> None:
    export = ExportTallyUseCase(state).execute(_resolve_invoice(state, args.invoice))
    path = _write(args.output, export.filename, export.content)
    print(f"Wrote {path}")


async def cmd_pdf(state: AppState, args: argparse.Namespace) -> None:
    document = state.assemble_for_invoice(_resolve_invoice(state, args.invoice))
    result = await ExportPdfUseCase().execute(document)
    if result.pdf_bytes is not None:
        print(f"Wrote {_write(args.output, result.filename, result.pdf_bytes)}")
        return
    print(result.error, file=sys.stderr)
    if result.fallback_html is not None:
        path = _write(args.output, document.print_filename, result.fallback_html)
        print(f"Wrote printable page {path}")
    raise CommandError("PDF export failed")


async def cmd_print(state: AppState, args: argparse.Namespace) -> None:
    document = state.assemble_for_invoice(_resolve_invoice(state, args.invoice))
    result = PrintInvoiceUseCase().execute(document, scale=args.scale)
    print(f"Wrote {_write(args.output, result.filename, result.html)}")


async def cmd_parse(state: AppState, args: argparse.Namespace) -> None:
    result = await ParseSmartBillUseCase(state).execute(args.text)
    if not result.ok or result.composer is None:
        raise CommandError(result.summary)

    print(result.summary)
    composer = result.composer
    for item in composer.items:
        print(f"  {item.name:<30} {item.quantity:>4} x {_money(item.price)}")
    if result.unmatched_items:
        print(f"Not in catalog (added as custom lines): {', '.join(result.unmatched_items)}")
    if result.customer is None:
        print("Customer not matched; select one before saving.")
    print(f"Grand total: {_money(composer.totals.grand_total)}")

    if args.save:
        saved = await SaveInvoiceUseCase(state).execute(composer)
        print(f"Saved {saved.invoice.invoice_number}")


async def cmd_stats(state: AppState, args: argparse.Namespace) -> None:
    stats = compute_dashboard_stats(state.invoices)
    print(f"Total sales:      {_money(stats.total_sales)}")
    print(f"Total tax:        {_money(stats.total_tax)}")
    print(f"Pending payments: {stats.pending_payments}")
    print(f"Invoices:         {stats.invoice_count}")
    if stats.recent:
        print("Recent:")
        for inv in stats.recent:
            print(f"  {inv.invoice_number:<14} {_money(inv.grand_total):>14}  {inv.status.value}")

    if args.insights:
        insights = await BusinessInsightsUseCase().execute(state.invoices, state.products)
        print("Insights:")
        for tip in insights:
            print(f"  - {tip}")


async def cmd_status(state: AppState, args: argparse.Namespace) -> None:
    from swipelite.infrastructure.llm import OllamaProvider

    settings = get_settings()
    print(f"SwipeLite {__version__} ({settings.environment})")
    print(f"Storage:  {settings.storage.backend} {settings.storage.db_path if settings.storage.backend == 'sqlite' else ''}".rstrip())
    print(f"Profile:  {state.active_profile.name}")
    print(
        f"Records:  {len(state.invoices)} invoices, {len(state.products)} products, "
        f"{len(state.customers)} customers, {len(state.templates)} templates"
    )
    health = await OllamaProvider().check_health()
    if health.available:
        print(f"LLM:      {health.provider} {health.model} ok ({health.response_time_ms:.0f} ms)")
    else:
        print(f"LLM:      {health.provider} {health.model} unavailable ({health.error})")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _run(command: Callable[[AppState, argparse.Namespace], Awaitable[None]], args: argparse.Namespace) -> None:
    structlog.contextvars.bind_contextvars(command=args.command)
    state = await open_state(args.backend)
    try:
        await command(state, args)
    finally:
        await state.close()
        structlog.contextvars.unbind_contextvars("command")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swipelite",
        description="SwipeLite invoicing CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--backend",
        choices=["sqlite", "memory"],
        default=None,
        help="Storage backend (default: STORAGE_BACKEND or sqlite)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # invoices
    p_list = sub.add_parser("invoices", help="List stored invoices, newest first")
    p_list.add_argument("--limit", type=int, default=50, help="Maximum rows (default: 50)")
    p_list.set_defaults(func=cmd_invoices)

    # show
    p_show = sub.add_parser("show", help="Show an invoice")
    p_show.add_argument("invoice", help="Invoice number or id")
    p_show.set_defaults(func=cmd_show)

    # exports
    for name, func, help_text in (
        ("tally", cmd_tally, "Export Tally XML voucher"),
        ("pdf", cmd_pdf, "Export invoice PDF"),
        ("print", cmd_print, "Export printable HTML"),
    ):
        p_export = sub.add_parser(name, help=help_text)
        p_export.add_argument("invoice", help="Invoice number or id")
        p_export.add_argument(
            "-o", "--output", type=Path, default=Path("."), help="Output directory (default: .)"
        )
        if name == "print":
            p_export.add_argument(
                "--scale", type=float, default=1.0, help="On-screen preview scale (default: 1.0)"
            )
        p_export.set_defaults(func=func)

    # parse
    p_parse = sub.add_parser("parse", help="Draft an invoice from free text using the LLM")
    p_parse.add_argument("text", help="Billing description")
    p_parse.add_argument("--save", action="store_true", help="Save the draft as an invoice")
    p_parse.set_defaults(func=cmd_parse)

    # stats
    p_stats = sub.add_parser("stats", help="Dashboard totals")
    p_stats.add_argument("--insights", action="store_true", help="Ask the LLM for business insights")
    p_stats.set_defaults(func=cmd_stats)

    # status
    p_status = sub.add_parser("status", help="Show storage and LLM status")
    p_status.set_defaults(func=cmd_status)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        asyncio.run(_run(args.func, args))
    except CommandError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except SwipeLiteError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
