"""Input handler for reading binaries, offsets and hex byte strings"""
import re
import sys
from pathlib import Path

from tinydis.error_handling import ErrorContext, create_error

_HEX_OFFSET = re.compile(r'^(0x)?([0-9a-fA-F]+)$')
_HEX_SEPARATORS = re.compile(r'[\s,]+')


class InputHandler:
    """Handles reading binary data from files, stdin, or hex text"""

    def read_binary(self, filepath: str) -> bytes:
        """
        Read a binary file.

        Args:
            filepath: Path to the file

        Returns:
            File contents

        Raises:
            InputError: If the file is missing, not a file, unreadable or empty
        """
        path = Path(filepath)
        context = ErrorContext(binary_path=str(filepath))

        if not path.exists():
            raise create_error("file_not_found", context=context, path=filepath)

        if not path.is_file():
            raise create_error("not_a_file", context=context, path=filepath)

        try:
            data = path.read_bytes()
        except OSError as e:
            raise create_error("unreadable_file", context=context, original_exception=e, path=filepath) from e

        if not data:
            raise create_error("empty_file", context=context, path=filepath)

        return data

    def read_from_stdin(self) -> bytes:
        """Read raw bytes from standard input"""
        data = sys.stdin.buffer.read()
        if not data:
            raise create_error("empty_file", path="<stdin>")
        return data

    def parse_offset(self, text: str) -> int:
        """
        Parse a hex offset such as "7C00" or "0x7c00".

        Raises:
            InputError: If the text is not a hex number
        """
        match = _HEX_OFFSET.match(text.strip()) if isinstance(text, str) else None
        if not match:
            raise create_error("invalid_offset", text=text)
        return int(match.group(2), 16)

    def parse_hex_bytes(self, text: str) -> bytes:
        """
        Parse hex byte pairs separated by whitespace or commas.

        A run without separators ("B83412") is split into pairs; an
        optional 0x prefix on each pair is accepted.
        """
        if not isinstance(text, str):
            raise create_error("invalid_hex", text=text)
        tokens = [t for t in _HEX_SEPARATORS.split(text.strip()) if t]
        if not tokens:
            raise create_error("invalid_hex", text=text)

        data = bytearray()
        for token in tokens:
            if token.lower().startswith("0x"):
                token = token[2:]
            if not token or len(token) % 2 or not re.fullmatch(r'[0-9a-fA-F]+', token):
                raise create_error("invalid_hex", text=text)
            data.extend(bytes.fromhex(token))
        return bytes(data)
