"""
belegdaten.cli
~~~~~~~~~~~~~~
Command-line interface for belegdaten.

Entry point registered in pyproject.toml::

    [project.scripts]
    belegdaten = "belegdaten.cli:main"

The input is plain text as produced by any PDF/OCR text dump tool.

Usage examples
--------------
    belegdaten --version

    # Single text dump
    belegdaten invoice.txt

    # From stdin, as JSON
    pdftotext invoice.pdf - | belegdaten --json -

    # Batch
    belegdaten --batch --input-dir dumps/ --output-dir results/
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from belegdaten import InvoiceDataExtractor
from belegdaten.config import Config
from belegdaten.models import AmountOfMoney, Invoice

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _format_amount(amount: Optional[AmountOfMoney]) -> str:
    if amount is None:
        return "—"
    return f"{amount.value:.2f} {amount.symbol}"


# ---------------------------------------------------------------------------
# CLI class
# ---------------------------------------------------------------------------

class BelegdatenCLI:

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        self.extractor = InvoiceDataExtractor(config=self.config)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def print_version(self) -> None:
        try:
            print(f"belegdaten version: {version('belegdaten')}")
        except PackageNotFoundError:
            print("belegdaten version: unknown")

    @staticmethod
    def _read_text(source: str) -> str:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8")

    # ------------------------------------------------------------------
    # Single document
    # ------------------------------------------------------------------

    def process_file(self, source: str, as_json: bool = False) -> int:
        """Extract one text dump (``-`` for stdin). Returns exit code."""
        try:
            text = self._read_text(source)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"[error] Cannot read {source}: {exc}", file=sys.stderr)
            return EXIT_ERROR

        invoice = self.extractor.extract_invoice_data(text)

        if as_json:
            print(json.dumps(
                {"source": source, "invoice": invoice.to_dict() if invoice else None},
                indent=2,
                ensure_ascii=False,
            ))
        elif invoice is None:
            print(f"✗  {source}: no invoice data found")
        else:
            self._print_summary(source, invoice)

        return EXIT_OK if invoice is not None else EXIT_NOT_FOUND

    @staticmethod
    def _print_summary(source: str, invoice: Invoice) -> None:
        rate = f"{invoice.vat_rate.value}%" if invoice.vat_rate else "—"
        print(f"✓  {source}")
        print(f"   Total: {_format_amount(invoice.total_amount)}"
              f"   Net: {_format_amount(invoice.net_amount)}"
              f"   VAT: {_format_amount(invoice.vat_amount)} ({rate})")
        if invoice.dates:
            print(f"   Dates: {', '.join(d.isoformat() for d in invoice.dates)}")
        if invoice.ibans:
            print(f"   IBAN : {', '.join(i.value for i in invoice.ibans)}")
        if invoice.bics:
            print(f"   BIC  : {', '.join(b.value for b in invoice.bics)}")

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def batch_process(
        self,
        input_dir: str | Path,
        output_dir: str | Path | None = None,
        verbose: bool = False,
    ) -> int:
        """Extract every ``*.txt`` file in *input_dir*. Returns exit code."""
        input_dir = Path(input_dir)
        out_dir   = Path(output_dir) if output_dir else None
        txt_files = sorted(input_dir.glob("*.txt"))

        if not txt_files:
            print(f"No text files found in {input_dir.resolve()}")
            return EXIT_NOT_FOUND

        if out_dir:
            out_dir.mkdir(parents=True, exist_ok=True)

        found  = 0
        errors = 0
        total_amount = Decimal(0)
        total_vat    = Decimal(0)

        for txt_path in txt_files:
            if verbose:
                print(f"Processing {txt_path.name} ...")
            try:
                text = txt_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"[error] Cannot read {txt_path.name}: {exc}", file=sys.stderr)
                errors += 1
                continue

            invoice = self.extractor.extract_invoice_data(text)
            if invoice is None:
                print(f"  ✗  {txt_path.name}")
                continue

            found += 1
            total_amount += invoice.total_amount.value
            if invoice.vat_amount is not None:
                total_vat += invoice.vat_amount.value
            print(f"  ✓  {txt_path.name:<30} {_format_amount(invoice.total_amount)}")

            if out_dir:
                json_path = out_dir / f"{txt_path.stem}_extracted.json"
                json_path.write_text(invoice.to_json(), encoding="utf-8")

        print(f"\n  Documents : {len(txt_files)}")
        print(f"  Invoices  : {found}")
        if errors:
            print(f"  Errors    : {errors}")
        print(f"  Total     : {total_amount:.2f}")
        print(f"  VAT       : {total_vat:.2f}")

        if errors:
            return EXIT_ERROR
        return EXIT_OK if found == len(txt_files) else EXIT_NOT_FOUND


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="belegdaten: extract total, net and VAT amounts from invoice text.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "files", nargs="*", metavar="FILE",
        help="Text dumps of invoices; '-' reads from stdin.",
    )
    parser.add_argument(
        "--version", action="store_true",
        help="Show package version and exit.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print results as JSON.",
    )

    batch_group = parser.add_argument_group("Batch processing")
    batch_group.add_argument(
        "--batch", action="store_true",
        help="Process every *.txt file in --input-dir.",
    )
    batch_group.add_argument(
        "--input-dir", default=None, metavar="DIR",
        help="Directory containing the text dumps.",
    )
    batch_group.add_argument(
        "--output-dir", default=None, metavar="DIR",
        help="Write one <name>_extracted.json per document here.",
    )

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args   = parser.parse_args(argv)

    try:
        config = Config()
    except ValidationError as exc:
        print(f"[error] Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.get_log_level(),
        format="%(levelname)-8s %(name)s — %(message)s",
    )

    cli = BelegdatenCLI(config)

    if args.version:
        cli.print_version()
        return EXIT_OK

    # -- Batch processing -------------------------------------------------
    if args.batch:
        if not args.input_dir:
            parser.error("--batch requires --input-dir")
        return cli.batch_process(
            input_dir=args.input_dir,
            output_dir=args.output_dir,
            verbose=args.verbose,
        )

    # -- Single documents -------------------------------------------------
    if args.files:
        return max(cli.process_file(f, as_json=args.json) for f in args.files)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
