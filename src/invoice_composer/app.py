from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from invoice_composer.core.errors import InvoiceComposerError
from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.services.documents import load_documents
from invoice_composer.core.services.options import load_options
from invoice_composer.utils.pdf.exports.pdf_export import export_documents_pdf

logger = logging.getLogger("invoice_composer")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render invoices, quotations and delivery notes to one PDF.")
    parser.add_argument("documents", type=Path, help="JSON file with the documents")
    parser.add_argument("-o", "--output", type=Path, default=Path("documents.pdf"), help="PDF to write")
    parser.add_argument("--options", type=Path, default=None, help="JSON file with rendering options")
    parser.add_argument("--header", default=None, help="header text (overrides the documents file)")
    parser.add_argument("--footer", default=None, help="footer text (overrides the documents file)")
    parser.add_argument("--pagination", action="store_true", help="print page numbers in header/footer")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        bundle = load_documents(args.documents)
        options = load_options(args.options) if args.options else (bundle.options or load_options())
        header = bundle.header
        footer = bundle.footer
        if args.header is not None:
            header = HeaderFooter(text=args.header, pagination=args.pagination)
        if args.footer is not None:
            footer = HeaderFooter(text=args.footer, pagination=args.pagination)
        pages = export_documents_pdf(args.output, bundle.documents, options, header=header, footer=footer)
    except InvoiceComposerError as exc:
        logger.error("Cannot build %s: %s", args.output, exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("Cannot read input: %s", exc)
        return 1

    logger.info("Wrote %d document(s) on %d page(s) to %s", len(bundle.documents), pages, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
