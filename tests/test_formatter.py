"""Tests for the output formatter"""
from tinydis.decoder import disassemble
from tinydis.formatter import OutputFormatter
from tinydis.pseudocode import synthesize


def test_assembly_view_hides_skipped_bytes():
    listing = disassemble(bytes([0x90, 0xFF, 0xC3]))
    lines = OutputFormatter().format_assembly_view(listing).split("\n")
    assert "ASSEMBLY VIEW" in lines[1]
    assert lines[3] == ""
    assert lines[4:] == [
        "0x00000000  " + "90".ljust(18) + " " + "nop".ljust(8) + " ",
        "0x00000002  " + "C3".ljust(18) + " " + "ret".ljust(8) + " ",
    ]


def test_pseudocode_view():
    listing = disassemble(bytes([0xC3]))
    view = OutputFormatter().format_pseudocode_view(synthesize(listing.results))
    lines = view.split("\n")
    assert "PSEUDO-CODE VIEW" in lines[1]
    assert lines[4:] == ["void function_0() {", "", "    return;", "}"]


def test_banner_lines_are_equal_width():
    view = OutputFormatter().format_pseudocode_view("")
    top, middle, bottom = view.split("\n")[:3]
    assert len(top) == len(middle) == len(bottom)


def test_hex_dump_rows():
    data = bytes(range(0x41, 0x41 + 20))
    lines = OutputFormatter().format_hex_dump(data, "boot.bin").split("\n")
    assert lines[0] == "File: boot.bin"
    assert lines[1] == "Size: 20 bytes (0x14)"
    assert lines[3].startswith("Offset(h) 00 01 02")
    assert lines[3].endswith("0F  Decoded text")
    assert lines[5] == (
        "00000000  41 42 43 44 45 46 47 48 49 4A 4B 4C 4D 4E 4F 50  ABCDEFGHIJKLMNOP"
    )
    assert lines[6] == "00000010  51 52 53 54" + " " * 38 + "QRST"


def test_hex_dump_non_printable():
    lines = OutputFormatter().format_hex_dump(bytes([0x00, 0x7F, 0x20])).split("\n")
    assert lines[0].startswith("Size: 3 bytes")
    assert lines[-1].endswith(" .. ")


def test_report_sections():
    listing = disassemble(bytes([0xB8, 0x34, 0x12, 0xFF, 0xC3]), base_address=0x7C00)
    report = OutputFormatter().format_report(listing, synthesize(listing.results), source="boot.bin")
    assert report.startswith("# ")
    assert "**File**: `boot.bin`" in report
    assert "0x00007C00 - 0x00007C05 (5 bytes)" in report
    assert "2 decoded, 1 bytes skipped" in report
    assert "ax = 0x1234; return;" in report
    assert "## Assembly" in report
    assert "void function_7C00() {" in report


def test_report_without_statements():
    listing = disassemble(bytes([0x90]))
    report = OutputFormatter().format_report(listing, synthesize(listing.results))
    assert "// No pseudo-code available" in report
