"""Pseudo-code synthesis for tinydis - one statement per decoded instruction"""
import logging
from typing import Callable, Dict, Iterable, List, Optional

from tinydis.models import DecodeResult, PseudoCodeDocument

logger = logging.getLogger(__name__)


def _strip_hex_prefix(operands: str) -> str:
    return operands.replace("0x", "")


class PseudoCodeSynthesizer:
    """
    Rewrites decoded instructions as C-like statements.

    This is a literal, line-for-line rewrite: branches become gotos, no
    blocks or loops are reconstructed, and every statement sits at the
    same indent inside a synthetic function wrapper.
    """

    # Mnemonics that produce no output at this level
    SUPPRESSED = frozenset({"push", "pop", "nop"})

    CONDITIONAL_JUMPS = frozenset({"jz", "jnz", "jl", "jle", "jg", "jge"})

    def __init__(self, indent_size: int = 4):
        self.indent_size = indent_size
        self.statement_builders = self._init_statement_builders()

    def _init_statement_builders(self) -> Dict[str, Callable[[DecodeResult], str]]:
        """Initialize the mnemonic -> statement table"""
        builders: Dict[str, Callable[[DecodeResult], str]] = {
            "mov": lambda i: f"{i.operands.replace(', ', ' = ', 1)};",
            "call": lambda i: f"function_{_strip_hex_prefix(i.operands)}();",
            "jmp": lambda i: f"goto loc_{_strip_hex_prefix(i.operands)};",
            "ret": lambda i: "return;",
            "int": lambda i: f"interrupt({i.operands});",
            "cli": lambda i: "disable_interrupts();",
            "sti": lambda i: "enable_interrupts();",
            "hlt": lambda i: "halt();",
        }
        for mnemonic in self.CONDITIONAL_JUMPS:
            builders[mnemonic] = (
                lambda i: f"if (condition_{i.mnemonic}) goto loc_{_strip_hex_prefix(i.operands)};"
            )
        return builders

    def translate(self, instruction: DecodeResult) -> Optional[str]:
        """
        Translate a single instruction to a pseudo-code statement.

        Args:
            instruction: Decoded instruction or skipped byte

        Returns:
            Statement text without indentation, or None when the
            instruction produces no output
        """
        mnemonic = instruction.mnemonic
        if not mnemonic or mnemonic in self.SUPPRESSED:
            return None

        builder = self.statement_builders.get(mnemonic)
        if builder is None:
            return f"// {mnemonic} {instruction.operands}"
        return builder(instruction)

    def build_document(self, instructions: Iterable[DecodeResult],
                       start_address: Optional[int] = None) -> PseudoCodeDocument:
        """Build the pseudo-code document for an instruction sequence"""
        instructions = list(instructions)
        if start_address is None:
            start_address = instructions[0].address if instructions else 0

        document = PseudoCodeDocument(start_address=start_address, indent_size=self.indent_size)
        for instruction in instructions:
            statement = self.translate(instruction)
            if statement is not None:
                document.add_statement(statement)

        logger.debug(f"Synthesized {len(document.lines)} statements from {len(instructions)} instructions")
        return document

    def synthesize(self, instructions: Iterable[DecodeResult], start_address: Optional[int] = None) -> str:
        """
        Render pseudo-code for an instruction sequence.

        Args:
            instructions: Decode results in memory order; skipped bytes are ignored
            start_address: Address used in the function name (defaults to the
                first instruction's address)

        Returns:
            Pseudo-code text
        """
        return self.build_document(instructions, start_address).render()


def synthesize(instructions: Iterable[DecodeResult], start_address: Optional[int] = None) -> str:
    """Render pseudo-code with a default synthesizer"""
    return PseudoCodeSynthesizer().synthesize(instructions, start_address)


def statements(instructions: Iterable[DecodeResult]) -> List[str]:
    """Bare statements, one per instruction that produces output"""
    synthesizer = PseudoCodeSynthesizer()
    return [s for s in (synthesizer.translate(i) for i in instructions) if s is not None]
