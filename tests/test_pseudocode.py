"""Tests for the pseudo-code synthesizer"""
import pytest

from tinydis.decoder import disassemble
from tinydis.models import DecodedInstruction, PseudoCodeDocument, SkippedByte, SkipReason
from tinydis.pseudocode import PseudoCodeSynthesizer, statements, synthesize


def instr(mnemonic, operands="", address=0, raw=b"\x00"):
    return DecodedInstruction(address=address, raw=raw, mnemonic=mnemonic, operands=operands)


@pytest.fixture
def synthesizer():
    return PseudoCodeSynthesizer()


class TestTranslate:
    """Mnemonic to statement mapping"""

    @pytest.mark.parametrize("mnemonic,operands,expected", [
        ("mov", "ax, 0x5", "ax = 0x5;"),
        ("mov", "al, 0x0E", "al = 0x0E;"),
        ("call", "0x1A2B", "function_1A2B();"),
        ("jmp", "0xFE", "goto loc_FE;"),
        ("jz", "0x10", "if (condition_jz) goto loc_10;"),
        ("jnz", "0x10", "if (condition_jnz) goto loc_10;"),
        ("jl", "0x7C05", "if (condition_jl) goto loc_7C05;"),
        ("jle", "0x7C05", "if (condition_jle) goto loc_7C05;"),
        ("jg", "0x7C05", "if (condition_jg) goto loc_7C05;"),
        ("jge", "0x7C05", "if (condition_jge) goto loc_7C05;"),
        ("ret", "", "return;"),
        ("int", "0x10", "interrupt(0x10);"),
        ("cli", "", "disable_interrupts();"),
        ("sti", "", "enable_interrupts();"),
        ("hlt", "", "halt();"),
    ])
    def test_mapped_statements(self, synthesizer, mnemonic, operands, expected):
        assert synthesizer.translate(instr(mnemonic, operands)) == expected

    @pytest.mark.parametrize("mnemonic,operands", [
        ("push", "ax"), ("pop", "bp"), ("nop", ""),
    ])
    def test_suppressed(self, synthesizer, mnemonic, operands):
        assert synthesizer.translate(instr(mnemonic, operands)) is None

    def test_unmapped_mnemonic_becomes_comment(self, synthesizer):
        assert synthesizer.translate(instr("int3")) == "// int3 "
        assert synthesizer.translate(instr("xchg", "ax, bx")) == "// xchg ax, bx"

    def test_skipped_byte_produces_nothing(self, synthesizer):
        assert synthesizer.translate(SkippedByte(0, 0xFF)) is None
        assert synthesizer.translate(SkippedByte(0, 0xB8, SkipReason.TRUNCATED)) is None

    def test_mov_only_first_separator_replaced(self, synthesizer):
        assert synthesizer.translate(instr("mov", "a, b, c")) == "a = b, c;"


class TestSynthesize:
    """Whole-document rendering"""

    def test_push_produces_no_lines(self):
        text = synthesize([instr("push", "ax")], start_address=0)
        assert text == "void function_0() {\n\n}"

    def test_mov_produces_one_line(self):
        text = synthesize([instr("mov", "ax, 0x5")], start_address=0)
        body = text.split("\n")[2:-1]
        assert body == ["    ax = 0x5;"]

    def test_end_to_end_nop_ret(self):
        listing = disassemble(bytes([0x90, 0xC3]), start=0)
        text = synthesize(listing.results, listing.start_address)
        assert text == "void function_0() {\n\n    return;\n}"

    def test_start_defaults_to_first_instruction(self):
        text = synthesize([instr("ret", address=0x7C00)])
        assert text.startswith("void function_7C00() {")

    def test_empty_input(self):
        assert synthesize([]) == "void function_0() {\n\n}"

    def test_skipped_bytes_are_ignored(self):
        text = synthesize([SkippedByte(0, 0xFF), instr("hlt", address=1)], start_address=0)
        assert text.split("\n") == ["void function_0() {", "", "    halt();", "}"]

    def test_no_structured_blocks(self):
        data = bytes([0xB8, 0x00, 0x00, 0x74, 0x02, 0xCD, 0x10, 0xE9, 0xF6, 0xFF, 0xC3])
        listing = disassemble(data)
        lines = synthesize(listing.results).split("\n")
        assert lines == [
            "void function_0() {",
            "",
            "    ax = 0x0000;",
            "    if (condition_jz) goto loc_7;",
            "    interrupt(0x10);",
            "    goto loc_0;",
            "    return;",
            "}",
        ]

    def test_call_target_from_decoder(self):
        listing = disassemble(bytes([0xE8, 0x00, 0x01]), base_address=0x100)
        assert "    function_203();" in synthesize(listing.results).split("\n")

    def test_idempotent(self, synthesizer):
        listing = disassemble(bytes([0xFA, 0xB0, 0x41, 0xCD, 0x10, 0xFB, 0xF4]))
        first = synthesizer.synthesize(listing.results, 0)
        second = synthesizer.synthesize(listing.results, 0)
        assert first == second

    def test_generator_input(self, synthesizer):
        listing = disassemble(bytes([0xC3]))
        text = synthesizer.synthesize(r for r in listing.results)
        assert "    return;" in text

    def test_custom_indent(self):
        text = PseudoCodeSynthesizer(indent_size=2).synthesize([instr("ret")])
        assert "  return;" in text.split("\n")

    def test_statements_helper(self):
        listing = disassemble(bytes([0x50, 0xB8, 0x01, 0x00, 0x58, 0xC3]))
        assert statements(listing.results) == ["ax = 0x0001;", "return;"]


class TestPseudoCodeDocument:
    def test_render(self):
        document = PseudoCodeDocument(start_address=0x1F)
        document.add_statement("halt();")
        assert document.render() == "void function_1F() {\n\n    halt();\n}"
