"""Core data models for tinydis"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Union


class SkipReason(Enum):
    """Why a byte was stepped over instead of decoded"""
    UNKNOWN_OPCODE = "unknown_opcode"
    TRUNCATED = "truncated"


@dataclass(frozen=True)
class DecodedInstruction:
    """A recognized instruction together with the exact bytes it was decoded from"""
    address: int                     # Absolute address of the opcode byte
    raw: bytes                       # Opcode byte plus operand bytes
    mnemonic: str                    # Lowercase instruction name (e.g., "mov")
    operands: str = ""               # Rendered operands (e.g., "ax, 0x1234")
    target: Optional[int] = None     # Absolute branch/call target if any

    is_recognized = True

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def raw_bytes(self) -> str:
        """Upper-case hex pairs, e.g. "B8 34 12" """
        return " ".join(f"{b:02X}" for b in self.raw)

    @property
    def formatted_line(self) -> str:
        """Display line: address, raw bytes column, mnemonic column, operands"""
        return f"0x{self.address:08X}  {self.raw_bytes:<18} {self.mnemonic:<8} {self.operands}"

    def __str__(self):
        if self.operands:
            return f"{self.mnemonic} {self.operands}"
        return self.mnemonic


@dataclass(frozen=True)
class SkippedByte:
    """
    A single byte the decoder stepped over.

    Shares the read-only surface of DecodedInstruction, with empty text
    fields, so a caller that only looks at ``formatted_line`` sees
    nothing to display.
    """
    address: int
    byte: int
    reason: SkipReason = SkipReason.UNKNOWN_OPCODE

    is_recognized = False
    mnemonic = ""
    operands = ""
    formatted_line = ""
    target = None

    @property
    def size(self) -> int:
        return 1

    @property
    def raw(self) -> bytes:
        return bytes([self.byte])

    @property
    def raw_bytes(self) -> str:
        return f"{self.byte:02X}"


DecodeResult = Union[DecodedInstruction, SkippedByte]


@dataclass
class DisassemblyListing:
    """Everything one decode session produced, in memory order"""
    start: int                       # Buffer offset decoding began at
    end: int                         # Buffer offset decoding stopped at
    base_address: int = 0
    results: List[DecodeResult] = field(default_factory=list)

    @property
    def instructions(self) -> List[DecodedInstruction]:
        return [r for r in self.results if r.is_recognized]

    @property
    def skipped(self) -> List[SkippedByte]:
        return [r for r in self.results if not r.is_recognized]

    @property
    def start_address(self) -> int:
        return self.base_address + self.start

    def assembly_lines(self) -> List[str]:
        """Formatted lines of the recognized instructions only"""
        return [r.formatted_line for r in self.results if r.formatted_line]


@dataclass
class PseudoCodeDocument:
    """Lines of pseudo-code inside a synthetic function wrapper"""
    start_address: int
    lines: List[str] = field(default_factory=list)
    indent_level: int = 1
    indent_size: int = 4

    def add_statement(self, statement: str):
        self.lines.append(" " * (self.indent_level * self.indent_size) + statement)

    @property
    def header(self) -> str:
        return f"void function_{self.start_address:X}() {{"

    def render(self) -> str:
        return "\n".join([self.header, ""] + self.lines + ["}"])
