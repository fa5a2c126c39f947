"""
Opcode table for the supported 16-bit x86 subset.

Each supported opcode byte maps to a DecodeRule that says how many
operand bytes follow and how to render them. Anything not in
OPCODE_TABLE is unrecognized.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class OperandKind(Enum):
    """How the operand bytes of an instruction are rendered"""
    NONE = "none"            # No operands
    REG16 = "reg16"          # Register encoded in the opcode (push/pop)
    REG8_IMM8 = "reg8_imm8"  # mov r8, imm8
    REG16_IMM16 = "reg16_imm16"  # mov r16, imm16
    IMM8 = "imm8"            # int imm8
    REL8 = "rel8"            # Short conditional branch
    REL16 = "rel16"          # Near call/jmp


REGISTERS_16 = ("ax", "cx", "dx", "bx", "sp", "bp", "si", "di")

ADDRESS_MASK = 0xFFFFFFFF


def register8_name(index: int) -> str:
    """Low byte register name, derived as 'a' + index with an 'l' suffix"""
    return f"{chr(ord('a') + index)}l"


@dataclass(frozen=True)
class DecodeRule:
    """How to decode one opcode byte"""
    mnemonic: str
    kind: OperandKind = OperandKind.NONE
    register_index: int = 0

    @property
    def operand_size(self) -> int:
        return OPERAND_SIZES[self.kind]

    @property
    def length(self) -> int:
        """Total encoded length including the opcode byte"""
        return 1 + self.operand_size


OPERAND_SIZES: Dict[OperandKind, int] = {
    OperandKind.NONE: 0,
    OperandKind.REG16: 0,
    OperandKind.REG8_IMM8: 1,
    OperandKind.REG16_IMM16: 2,
    OperandKind.IMM8: 1,
    OperandKind.REL8: 1,
    OperandKind.REL16: 2,
}

CONDITIONAL_JUMPS: Dict[int, str] = {
    0x74: "jz",
    0x75: "jnz",
    0x7C: "jl",
    0x7D: "jge",
    0x7E: "jle",
    0x7F: "jg",
}


def _build_table() -> Dict[int, DecodeRule]:
    table: Dict[int, DecodeRule] = {
        0x90: DecodeRule("nop"),
        0xC3: DecodeRule("ret"),
        0xCC: DecodeRule("int3"),
        0xF4: DecodeRule("hlt"),
        0xFA: DecodeRule("cli"),
        0xFB: DecodeRule("sti"),
        0xCD: DecodeRule("int", OperandKind.IMM8),
        0xE8: DecodeRule("call", OperandKind.REL16),
        0xE9: DecodeRule("jmp", OperandKind.REL16),
    }

    for index in range(8):
        table[0x50 + index] = DecodeRule("push", OperandKind.REG16, index)
        table[0x58 + index] = DecodeRule("pop", OperandKind.REG16, index)
        table[0xB0 + index] = DecodeRule("mov", OperandKind.REG8_IMM8, index)
        table[0xB8 + index] = DecodeRule("mov", OperandKind.REG16_IMM16, index)

    for opcode, mnemonic in CONDITIONAL_JUMPS.items():
        table[opcode] = DecodeRule(mnemonic, OperandKind.REL8)

    return table


OPCODE_TABLE: Dict[int, DecodeRule] = _build_table()


def lookup(opcode: int) -> Optional[DecodeRule]:
    """Return the decode rule for an opcode byte, or None if unsupported"""
    return OPCODE_TABLE.get(opcode)


def _signed(value: int, bits: int) -> int:
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def branch_target(address: int, length: int, displacement: int) -> int:
    """
    Absolute target of a relative branch.

    The displacement counts from the end of the branch instruction, i.e.
    instruction start + encoded length + signed displacement.
    """
    return (address + length + displacement) & ADDRESS_MASK


def render_operands(rule: DecodeRule, operand_bytes: bytes, address: int) -> Tuple[str, Optional[int]]:
    """
    Render the operand text for a rule.

    Args:
        rule: Decode rule of the opcode
        operand_bytes: Exactly rule.operand_size bytes following the opcode
        address: Absolute address of the opcode byte

    Returns:
        Tuple of (operand_text, branch_target or None)
    """
    kind = rule.kind

    if kind == OperandKind.NONE:
        return "", None

    if kind == OperandKind.REG16:
        return REGISTERS_16[rule.register_index], None

    if kind == OperandKind.REG8_IMM8:
        return f"{register8_name(rule.register_index)}, 0x{operand_bytes[0]:02X}", None

    if kind == OperandKind.REG16_IMM16:
        value = int.from_bytes(operand_bytes[:2], "little")
        return f"{REGISTERS_16[rule.register_index]}, 0x{value:04X}", None

    if kind == OperandKind.IMM8:
        return f"0x{operand_bytes[0]:02X}", None

    if kind == OperandKind.REL8:
        target = branch_target(address, rule.length, _signed(operand_bytes[0], 8))
        return f"0x{target:X}", target

    if kind == OperandKind.REL16:
        displacement = _signed(int.from_bytes(operand_bytes[:2], "little"), 16)
        target = branch_target(address, rule.length, displacement)
        return f"0x{target:X}", target

    raise ValueError(f"Unhandled operand kind: {kind}")
