import base64
import struct
import xml.etree.ElementTree as ET
import zipfile
import zlib

import pytest

from datahandler.manager import Manager
from datahandler.report import PlotBlock, Report, TableBlock
from datahandler.variable import Naming, Variable

OFFICE = "urn:oasis:names:tc:opendocument:xmlns:office:1.0"
TEXT = "urn:oasis:names:tc:opendocument:xmlns:text:1.0"
TABLE = "urn:oasis:names:tc:opendocument:xmlns:table:1.0"


def _tag(namespace, name):
    return "{" + namespace + "}" + name


def _chunk(kind, payload):
    body = kind + payload
    return struct.pack(">I", len(payload)) + body + struct.pack(">I", zlib.crc32(body))


def make_png(width, height):
    header = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    raw = b"".join(b"\x00" + b"\x00" * width for _ in range(height))
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", zlib.compress(raw))
        + _chunk(b"IEND", b"")
    )


@pytest.fixture
def manager():
    m = Manager()
    m.add_variable(Variable([1.5, 2], Naming("A")))
    m.add_variable(Variable([3], Naming("B")))
    return m


def read_content(path):
    with zipfile.ZipFile(path) as archive:
        return ET.fromstring(archive.read("content.xml"))


def test_blocks_are_added_in_order(manager):
    report = Report()
    text = report.add_text("x")
    table = report.add_table(manager, [0])
    plot = report.add_plot(make_png(2, 3))
    assert report.blocks == [text, table, plot]


def test_move_up_swaps_with_previous():
    report = Report()
    first, second = report.add_text("a"), report.add_text("b")
    assert report.move_up(second) is True
    assert report.blocks == [second, first]
    assert report.move_up(second) is False
    assert report.blocks == [second, first]


def test_move_down_swaps_with_next():
    report = Report()
    first, second = report.add_text("a"), report.add_text("b")
    assert report.move_down(second) is False
    assert report.move_down(first) is True
    assert report.blocks == [second, first]


def test_identical_blocks_are_told_apart():
    report = Report()
    first, second = report.add_text("same"), report.add_text("same")
    report.delete(second)
    assert len(report.blocks) == 1
    assert report.blocks[0] is first


def test_unknown_block_raises():
    report = Report()
    report.add_text("a")
    stranger = Report().add_text("a")
    with pytest.raises(ValueError):
        report.delete(stranger)
    with pytest.raises(ValueError):
        report.move_up(stranger)


def test_table_block_snapshots_selected_columns(manager):
    block = TableBlock(manager, [1, 0])
    assert block.headers == ["B", "A"]
    assert block.rows == [["3", "1.5"], ["0", "2"]]
    manager.variable(0).measurements[0] = 9.0
    assert block.rows[0][1] == "1.5"


def test_table_block_needs_columns(manager):
    with pytest.raises(ValueError):
        TableBlock(manager, [])
    with pytest.raises(IndexError):
        TableBlock(manager, [5])


def test_plot_block_reads_png_size():
    assert PlotBlock(make_png(7, 4)).size == (7, 4)


def test_plot_block_rejects_other_data():
    with pytest.raises(ValueError):
        PlotBlock(b"GIF89a not a png")


def test_assemble_writes_opendocument_archive(tmp_path):
    path = tmp_path / "out.odt"
    report = Report()
    report.add_text("hello")
    report.assemble(path)
    with zipfile.ZipFile(path) as archive:
        names = archive.namelist()
        mimetype = archive.read("mimetype")
        compress_type = archive.getinfo("mimetype").compress_type
    assert names[0] == "mimetype"
    assert mimetype == b"application/vnd.oasis.opendocument.text"
    assert compress_type == zipfile.ZIP_STORED
    assert "META-INF/manifest.xml" in names


def test_consecutive_text_blocks_share_a_paragraph(tmp_path):
    path = tmp_path / "t.odt"
    report = Report()
    report.add_text("Hello ")
    report.add_text("world")
    report.assemble(path)
    paragraphs = read_content(path).findall(".//" + _tag(TEXT, "p"))
    assert ["".join(p.itertext()) for p in paragraphs] == ["Hello world"]


def test_table_cells_are_written(tmp_path, manager):
    path = tmp_path / "table.odt"
    report = Report()
    block = report.add_table(manager, [0, 1])
    report.assemble(path)
    rows = read_content(path).findall(".//" + _tag(TABLE, "table-row"))
    texts = [
        ["".join(cell.itertext()) for cell in row.findall(_tag(TABLE, "table-cell"))]
        for row in rows
    ]
    assert texts == [block.headers] + list(block.rows)


def test_plot_image_is_embedded(tmp_path):
    path = tmp_path / "plot.odt"
    png = make_png(3, 3)
    report = Report()
    report.add_plot(png)
    report.assemble(path)
    data = read_content(path).find(".//" + _tag(OFFICE, "binary-data"))
    assert base64.b64decode(data.text) == png


def test_deleted_block_is_not_assembled(tmp_path):
    path = tmp_path / "d.odt"
    report = Report()
    kept = report.add_text("kept")
    gone = report.add_text("gone")
    report.delete(gone)
    report.assemble(path)
    text = "".join(read_content(path).itertext())
    assert text == kept.text