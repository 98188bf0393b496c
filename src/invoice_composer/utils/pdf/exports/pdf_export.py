from __future__ import annotations

from pathlib import Path
from typing import Iterable

from invoice_composer.core.models.document import Document
from invoice_composer.core.models.header_footer import HeaderFooter
from invoice_composer.core.models.options import Options
from invoice_composer.utils.pdf.renderers.pdf_renderer import MultiDocument


def export_documents_pdf(
    path: Path,
    docs: Iterable[Document],
    options: Options | None = None,
    header: HeaderFooter | None = None,
    footer: HeaderFooter | None = None,
) -> int:
    """
    Render `docs` in order into one PDF at `path`. Returns the number of pages.
    """
    composer = MultiDocument(options)
    composer.set_header(header)
    composer.set_footer(footer)
    for doc in docs:
        composer.add_document(doc)
    composer.write(Path(path))
    return composer.page_count

