from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

DEFAULT_FONT_SIZE = 10.0


@dataclass
class HeaderFooter:
    """
    Repeating page decoration shared by every document of a build.

    `text` accepts a small markup (`<center>`, `<right>`, `<b>`, `<i>`, `<br>`)
    and a `{page}` token. `custom_render(canvas, page_no)` replaces the
    built-in rendering entirely.
    """

    text: str = ""
    font_size: float = DEFAULT_FONT_SIZE
    pagination: bool = False
    custom_render: Optional[Callable[[Any, int], None]] = None

    def __post_init__(self) -> None:
        if not self.font_size or self.font_size <= 0:
            self.font_size = DEFAULT_FONT_SIZE
