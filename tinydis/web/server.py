"""Flask JSON API for tinydis"""
import logging
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from tinydis.__version__ import __version__
from tinydis.decoder import DEFAULT_MAX_BYTES, DecodeOptions, InstructionDecoder
from tinydis.error_handling import InputError, TinyDisError, create_error
from tinydis.formatter import OutputFormatter
from tinydis.input_handler import InputHandler
from tinydis.pseudocode import PseudoCodeSynthesizer

logger = logging.getLogger(__name__)


class DisassemblerServer:
    """HTTP front end: bytes and a start offset in, both views out"""

    def __init__(self, max_content_length: int = 16 * 1024 * 1024):
        """
        Initialize the server.

        Args:
            max_content_length: Largest accepted upload, in bytes
        """
        self.app = Flask(__name__)
        self.app.config['MAX_CONTENT_LENGTH'] = max_content_length
        self.input_handler = InputHandler()
        self.synthesizer = PseudoCodeSynthesizer()
        self.formatter = OutputFormatter()

        self._register_routes()

    def _request_fields(self) -> Dict[str, Any]:
        if request.is_json:
            return request.get_json(silent=True) or {}
        return request.form.to_dict()

    def _request_data(self, fields: Dict[str, Any]) -> Tuple[bytes, Optional[str]]:
        """Bytes from an uploaded file or from a "hex" field"""
        upload = request.files.get('file')
        if upload is not None and upload.filename:
            data = upload.read()
            if not data:
                raise create_error("empty_file", path=upload.filename)
            return data, upload.filename

        hex_text = fields.get('hex')
        if not hex_text:
            raise InputError("No file or hex bytes provided")
        return self.input_handler.parse_hex_bytes(hex_text), None

    def _offset_field(self, fields: Dict[str, Any], name: str) -> int:
        """JSON numbers are taken as-is, strings are parsed as hex"""
        value = fields.get(name)
        if value is None or value == '':
            return 0
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise create_error("invalid_offset", text=value)
            return value
        return self.input_handler.parse_offset(value)

    def _decode_options(self, fields: Dict[str, Any]) -> DecodeOptions:
        start = self._offset_field(fields, 'offset')
        base = self._offset_field(fields, 'base')

        max_bytes: Optional[int] = DEFAULT_MAX_BYTES
        raw_max = fields.get('max_bytes')
        if raw_max not in (None, ''):
            try:
                max_bytes = int(raw_max)
            except (TypeError, ValueError):
                raise create_error("invalid_max_bytes", value=raw_max)
            if max_bytes <= 0:
                raise create_error("invalid_max_bytes", value=raw_max)

        return DecodeOptions(start=start, max_bytes=max_bytes, base_address=base)

    def _register_routes(self):
        """Register all Flask routes"""

        @self.app.route('/api/health')
        def health():
            return jsonify({'status': 'ok', 'version': __version__})

        @self.app.route('/api/disassemble', methods=['POST'])
        def api_disassemble():
            """Decode a window of bytes and synthesize pseudo-code"""
            try:
                fields = self._request_fields()
                data, filename = self._request_data(fields)
                options = self._decode_options(fields)
                listing = InstructionDecoder(options).decode(data)
            except TinyDisError as e:
                logger.warning(f"Rejected disassemble request: {e.message}")
                return jsonify({'error': e.message}), 400

            pseudocode = self.synthesizer.synthesize(listing.results, listing.start_address)
            return jsonify({
                'filename': filename,
                'start': listing.start_address,
                'end': listing.base_address + listing.end,
                'assembly': listing.assembly_lines(),
                'pseudocode': pseudocode,
                'skipped': len(listing.skipped),
            })

        @self.app.route('/api/hexdump', methods=['POST'])
        def api_hexdump():
            """Hex dump of the submitted bytes"""
            try:
                fields = self._request_fields()
                data, filename = self._request_data(fields)
            except TinyDisError as e:
                return jsonify({'error': e.message}), 400
            return jsonify({'hexdump': self.formatter.format_hex_dump(data, filename)})


def create_app(max_content_length: int = 16 * 1024 * 1024) -> Flask:
    """
    Factory function to create the Flask app.

    Args:
        max_content_length: Largest accepted upload, in bytes

    Returns:
        Flask application instance
    """
    return DisassemblerServer(max_content_length).app
