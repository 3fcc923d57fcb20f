"""Reports built from text, tables and plot images, saved as OpenDocument text."""

from __future__ import annotations

import base64
import os
import re
import struct
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union
from xml.sax.saxutils import escape, quoteattr

from .manager import Manager

PathLike = Union[str, os.PathLike]

MIMETYPE = "application/vnd.oasis.opendocument.text"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
SCREEN_DPI = 96

_NAMESPACES = (
    'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
    'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0" '
    'xmlns:table="urn:oasis:names:tc:opendocument:xmlns:table:1.0" '
    'xmlns:draw="urn:oasis:names:tc:opendocument:xmlns:drawing:1.0" '
    'xmlns:svg="urn:oasis:names:tc:opendocument:xmlns:svg-compatible:1.0"'
)

_MANIFEST = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0"'
    ' manifest:version="1.2">'
    f'<manifest:file-entry manifest:full-path="/" manifest:media-type="{MIMETYPE}"'
    ' manifest:version="1.2"/>'
    '<manifest:file-entry manifest:full-path="content.xml" manifest:media-type="text/xml"/>'
    "</manifest:manifest>"
)

_SPACES = re.compile(r" {2,}")


def _text_xml(text: str) -> str:
    escaped = escape(text).replace("\t", "<text:tab/>")
    return _SPACES.sub(
        lambda m: f' <text:s text:c="{len(m.group()) - 1}"/>', escaped
    )


class _ContentWriter:
    """Accumulates the body of a text document."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._runs: list[str] = []
        self._tables = 0
        self._images = 0

    def text(self, text: str) -> None:
        self._runs.append(_text_xml(text))

    def end_paragraph(self) -> None:
        self._parts.append("<text:p>" + "".join(self._runs) + "</text:p>")
        self._runs = []

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        if self._runs:
            self.end_paragraph()
        self._tables += 1
        cells = lambda values: "".join(  # noqa: E731
            '<table:table-cell office:value-type="string"><text:p>'
            + _text_xml(value)
            + "</text:p></table:table-cell>"
            for value in values
        )
        body = "".join(
            f"<table:table-row>{cells(row)}</table:table-row>"
            for row in [headers, *rows]
        )
        self._parts.append(
            f'<table:table table:name="Table{self._tables}">'
            f'<table:table-column table:number-columns-repeated="{len(headers)}"/>'
            f"{body}</table:table>"
        )

    def image(self, png: bytes, width: int, height: int) -> None:
        self._images += 1
        data = base64.b64encode(png).decode("ascii")
        self._runs.append(
            f'<draw:frame draw:name="Plot{self._images}" text:anchor-type="as-char"'
            f' svg:width="{width / SCREEN_DPI:.4f}in"'
            f' svg:height="{height / SCREEN_DPI:.4f}in">'
            f"<draw:image><office:binary-data>{data}</office:binary-data></draw:image>"
            "</draw:frame>"
        )
        self.end_paragraph()

    def document(self) -> str:
        if self._runs or not self._parts:
            self.end_paragraph()
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<office:document-content {_NAMESPACES} office:version="1.2">'
            "<office:body><office:text>"
            + "".join(self._parts)
            + "</office:text></office:body></office:document-content>"
        )


@dataclass(eq=False)
class TextBlock:
    """A piece of text; consecutive text blocks run on in one paragraph."""

    text: str = ""

    def _write(self, writer: _ContentWriter) -> None:
        writer.text(self.text)


@dataclass(eq=False, init=False)
class TableBlock:
    """A snapshot of some variables' measurements as a table."""

    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def __init__(self, manager: Manager, column_indexes: Iterable[int]) -> None:
        variables = [manager.variable(index) for index in column_indexes]
        if not variables:
            raise ValueError("a table needs at least one variable")
        self.headers = [variable.naming.title for variable in variables]
        self.rows = [
            [f"{variable.measurements[row]:g}" for variable in variables]
            for row in range(manager.measurements_count())
        ]

    def _write(self, writer: _ContentWriter) -> None:
        writer.table(self.headers, self.rows)


@dataclass(eq=False)
class PlotBlock:
    """A PNG image of a plot."""

    image: bytes

    def __post_init__(self) -> None:
        self.image = bytes(self.image)
        if not self.image.startswith(PNG_SIGNATURE) or self.image[12:16] != b"IHDR":
            raise ValueError("plot images must be PNG data")
        if len(self.image) < 24:
            raise ValueError("truncated PNG data")

    @property
    def size(self) -> tuple[int, int]:
        """Width and height of the image in pixels."""
        return struct.unpack(">II", self.image[16:24])

    def _write(self, writer: _ContentWriter) -> None:
        writer.image(self.image, *self.size)


Block = Union[TextBlock, TableBlock, PlotBlock]


class Report:
    """An ordered list of blocks that is assembled into one document."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []

    def _add(self, block: Block) -> Block:
        self.blocks.append(block)
        return block

    def add_text(self, text: str = "") -> TextBlock:
        return self._add(TextBlock(text))

    def add_table(self, manager: Manager, column_indexes: Iterable[int]) -> TableBlock:
        return self._add(TableBlock(manager, column_indexes))

    def add_plot(self, image: bytes) -> PlotBlock:
        return self._add(PlotBlock(image))

    def _index(self, block: Block) -> int:
        for index, candidate in enumerate(self.blocks):
            if candidate is block:
                return index
        raise ValueError("the block is not part of this report")

    def delete(self, block: Block) -> None:
        del self.blocks[self._index(block)]

    def move_up(self, block: Block) -> bool:
        """Swap ``block`` with the one before it; returns whether it moved."""
        index = self._index(block)
        if index == 0:
            return False
        self.blocks[index - 1], self.blocks[index] = self.blocks[index], self.blocks[index - 1]
        return True

    def move_down(self, block: Block) -> bool:
        """Swap ``block`` with the one after it; returns whether it moved."""
        index = self._index(block)
        if index == len(self.blocks) - 1:
            return False
        self.blocks[index + 1], self.blocks[index] = self.blocks[index], self.blocks[index + 1]
        return True

    def assemble(self, path: PathLike) -> None:
        """Write the blocks, in order, to an OpenDocument text file."""
        writer = _ContentWriter()
        for block in self.blocks:
            block._write(writer)
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr(
                zipfile.ZipInfo("mimetype"), MIMETYPE, compress_type=zipfile.ZIP_STORED
            )
            archive.writestr(
                "META-INF/manifest.xml", _MANIFEST, compress_type=zipfile.ZIP_DEFLATED
            )
            archive.writestr(
                "content.xml", writer.document(), compress_type=zipfile.ZIP_DEFLATED
            )


__all__ = ["TextBlock", "TableBlock", "PlotBlock", "Report", "quoteattr"][:4]