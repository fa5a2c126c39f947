"""Table-driven decoder for the supported 16-bit x86 subset"""
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from tinydis.error_handling import ConfigurationError, DecodeRangeError, ErrorContext, create_error
from tinydis.models import (
    DecodedInstruction,
    DecodeResult,
    DisassemblyListing,
    SkippedByte,
    SkipReason,
)
from tinydis.opcodes import lookup, render_operands

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 512


def decode_one(buffer: Sequence[int], cursor: int, base_address: int = 0) -> Tuple[DecodeResult, int]:
    """
    Decode the instruction that starts at ``cursor``.

    Always consumes at least the opcode byte. An unsupported opcode, or a
    supported one whose operand bytes run past the end of the buffer,
    yields a SkippedByte and advances the cursor by exactly one.

    Args:
        buffer: Bytes to decode from (bytes, bytearray, memoryview, list of ints)
        cursor: Offset of the opcode byte, 0 <= cursor < len(buffer)
        base_address: Added to buffer offsets to form absolute addresses

    Returns:
        Tuple of (result, new_cursor)

    Raises:
        DecodeRangeError: If cursor is outside the buffer
    """
    if cursor < 0 or cursor >= len(buffer):
        raise DecodeRangeError(
            f"Cursor {cursor} is outside the buffer (0x{len(buffer):X} bytes)",
            context=ErrorContext(function="decode_one", address=base_address + cursor),
        )

    address = base_address + cursor
    opcode = buffer[cursor]
    rule = lookup(opcode)

    if rule is None:
        logger.debug(f"Skipped unrecognized opcode 0x{opcode:02X} at 0x{address:X}")
        return SkippedByte(address, opcode, SkipReason.UNKNOWN_OPCODE), cursor + 1

    end = cursor + rule.length
    if end > len(buffer):
        logger.debug(f"Skipped truncated {rule.mnemonic} (0x{opcode:02X}) at 0x{address:X}")
        return SkippedByte(address, opcode, SkipReason.TRUNCATED), cursor + 1

    raw = bytes(buffer[cursor:end])
    operands, target = render_operands(rule, raw[1:], address)
    return DecodedInstruction(address, raw, rule.mnemonic, operands, target), end


@dataclass
class DecodeOptions:
    """Settings for one decode session"""
    start: int = 0                              # Buffer offset to begin at
    max_bytes: Optional[int] = DEFAULT_MAX_BYTES  # Byte ceiling, None for no limit
    base_address: int = 0                       # Address of buffer offset 0


class InstructionDecoder:
    """
    Drives decode_one over a buffer, one instruction at a time.

    The session is bounded by the end of the buffer and by the byte
    ceiling. An instruction that would cross the ceiling is not started.
    """

    def __init__(self, options: Optional[DecodeOptions] = None):
        self.options = options or DecodeOptions()
        if self.options.max_bytes is not None and self.options.max_bytes <= 0:
            raise create_error("invalid_max_bytes", value=self.options.max_bytes, error_class=ConfigurationError)

    def window_end(self, buffer: Sequence[int]) -> int:
        """Offset one past the last byte this session may consume"""
        if self.options.max_bytes is None:
            return len(buffer)
        return min(len(buffer), self.options.start + self.options.max_bytes)

    def _check_start(self, buffer: Sequence[int]):
        start = self.options.start
        if start < 0 or start > len(buffer):
            raise create_error(
                "offset_out_of_range",
                offset=start,
                size=len(buffer),
                error_class=DecodeRangeError,
            )

    def iter_decode(self, buffer: Sequence[int]) -> Iterator[DecodeResult]:
        """Yield decode results in memory order"""
        self._check_start(buffer)
        cursor = self.options.start
        end = self.window_end(buffer)

        while cursor < end:
            result, next_cursor = decode_one(buffer, cursor, self.options.base_address)
            if next_cursor > end:
                logger.debug(f"Stopping before {result.mnemonic} at 0x{result.address:X}: crosses byte ceiling")
                break
            yield result
            cursor = next_cursor

    def decode(self, buffer: Sequence[int]) -> DisassemblyListing:
        """Decode a whole session into a listing"""
        listing = DisassemblyListing(
            start=self.options.start,
            end=self.options.start,
            base_address=self.options.base_address,
        )
        for result in self.iter_decode(buffer):
            listing.results.append(result)
            listing.end = result.address - self.options.base_address + result.size

        logger.info(
            f"Decoded {len(listing.instructions)} instructions, skipped {len(listing.skipped)} bytes "
            f"(0x{listing.start:X}-0x{listing.end:X})"
        )
        return listing


def disassemble(buffer: Sequence[int], start: int = 0, max_bytes: Optional[int] = DEFAULT_MAX_BYTES,
                base_address: int = 0) -> DisassemblyListing:
    """Convenience wrapper around InstructionDecoder"""
    options = DecodeOptions(start=start, max_bytes=max_bytes, base_address=base_address)
    return InstructionDecoder(options).decode(buffer)
