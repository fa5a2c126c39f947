#!/usr/bin/env python3
"""
tinydis - 16-bit x86 disassembler with a pseudo-code view

Decodes a window of a binary file into an assembly listing and rewrites
it as goto-style pseudo-code.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tinydis.__version__ import __version__
from tinydis.decoder import DEFAULT_MAX_BYTES, DecodeOptions, InstructionDecoder
from tinydis.error_handling import TinyDisError, create_error, get_error_handler
from tinydis.formatter import OutputFormatter
from tinydis.input_handler import InputHandler
from tinydis.pseudocode import PseudoCodeSynthesizer


def start_web_server(port: int = 8000):
    """Start the JSON API server (blocking)

    Args:
        port: Port number to run the server on (default: 8000)
    """
    from tinydis.web.server import create_app

    app = create_app()
    print(f"🌐 tinydis API running on http://localhost:{port}")
    print("Press Ctrl+C to stop\n")
    app.run(host='127.0.0.1', port=port, debug=False, use_reloader=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tinydis',
        description='🔍 tinydis - 16-bit x86 disassembler with a pseudo-code view',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
📖 QUICK START:

  Disassemble a boot sector:
    tinydis boot.bin

  Start somewhere else, decode at most 64 bytes:
    tinydis kernel.bin --offset 200 --max-bytes 64

  Decode bytes typed on the command line:
    tinydis --hex "B8 34 12 E8 FD FF C3"

  Hex dump:
    tinydis boot.bin --view hex

  JSON API:
    tinydis --web --port 8000
        """
    )

    parser.add_argument(
        'file',
        nargs='?',
        type=str,
        help='Binary file to disassemble'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    source = parser.add_argument_group('📥 Input Options')
    source.add_argument(
        '--hex',
        type=str,
        metavar='BYTES',
        help='Decode hex bytes given on the command line instead of a file'
    )
    source.add_argument(
        '--stdin',
        action='store_true',
        help='Read raw bytes from standard input'
    )

    window = parser.add_argument_group('🎯 Decode Window Options')
    window.add_argument(
        '--offset',
        type=str,
        default='0',
        metavar='HEX',
        help='Start offset in hex (default: 0)'
    )
    window.add_argument(
        '--max-bytes',
        type=int,
        default=DEFAULT_MAX_BYTES,
        metavar='N',
        help=f'Decode at most N bytes from the start offset (default: {DEFAULT_MAX_BYTES})'
    )
    window.add_argument(
        '--unlimited',
        action='store_true',
        help='Decode to the end of the buffer'
    )
    window.add_argument(
        '--base',
        type=str,
        default='0',
        metavar='HEX',
        help='Address of buffer offset 0, in hex (default: 0)'
    )

    output = parser.add_argument_group('💾 Output Options')
    output.add_argument(
        '--view',
        choices=['asm', 'pseudo', 'both', 'hex'],
        default='both',
        help='Which view to print (default: both)'
    )
    output.add_argument(
        '--output', '-o',
        type=str,
        metavar='FILE',
        help='Save a Markdown report to FILE'
    )
    output.add_argument(
        '--debug',
        action='store_true',
        help='Verbose logging, including every skipped byte'
    )

    web = parser.add_argument_group('🌐 Web Interface Options')
    web.add_argument(
        '--web',
        action='store_true',
        help='Start the JSON API server'
    )
    web.add_argument(
        '--port',
        type=int,
        default=8000,
        metavar='PORT',
        help='Port for the API server (default: 8000)'
    )

    return parser


def _load_input(args, input_handler: InputHandler) -> bytes:
    if args.hex:
        return input_handler.parse_hex_bytes(args.hex)
    if args.stdin:
        return input_handler.read_from_stdin()
    return input_handler.read_binary(args.file)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tinydis CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    error_handler = get_error_handler(debug_mode=args.debug)

    if args.web:
        start_web_server(port=args.port)
        return 0

    if not args.file and not args.hex and not args.stdin:
        parser.print_help()
        print("\n❌ Error: No input provided", file=sys.stderr)
        print("💡 Try: tinydis boot.bin", file=sys.stderr)
        return 1

    input_handler = InputHandler()
    formatter = OutputFormatter()

    try:
        data = _load_input(args, input_handler)

        if args.view == 'hex':
            name = Path(args.file).name if args.file else None
            print(formatter.format_hex_dump(data, name))
            return 0

        if not args.unlimited and args.max_bytes <= 0:
            raise create_error("invalid_max_bytes", value=args.max_bytes)

        options = DecodeOptions(
            start=input_handler.parse_offset(args.offset),
            max_bytes=None if args.unlimited else args.max_bytes,
            base_address=input_handler.parse_offset(args.base),
        )
        listing = InstructionDecoder(options).decode(data)
        pseudocode = PseudoCodeSynthesizer().synthesize(listing.results, listing.start_address)

        if args.view in ('asm', 'both'):
            print(formatter.format_assembly_view(listing))
        if args.view == 'both':
            print()
        if args.view in ('pseudo', 'both'):
            print(formatter.format_pseudocode_view(pseudocode))

        if args.output:
            report = formatter.format_report(listing, pseudocode, source=args.file)
            try:
                Path(args.output).write_text(report, encoding='utf-8')
            except OSError as e:
                raise create_error("unwritable_output", original_exception=e, path=args.output) from e
            print(f"\n✓ Report saved to {args.output}", file=sys.stderr)

    except TinyDisError as e:
        if args.debug:
            error_handler.handle_error(e)
        print(f"❌ {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"💡 {e.suggestion}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
