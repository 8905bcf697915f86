"""
Command line launcher for the Dev Toolkit server.
"""

import argparse
import logging

from .config.settings import get_config_directory, get_section
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

PORT_FILE = ".port"


def write_port_file(port: int):
    """Write the port number to .port file for other processes to read."""
    config_dir = get_config_directory()
    config_dir.mkdir(parents=True, exist_ok=True)
    port_file = config_dir / PORT_FILE
    with open(port_file, 'w') as f:
        f.write(str(port))
    logger.info("Port %s written to %s", port, port_file)


def cleanup_port_file():
    """Remove the .port file on shutdown."""
    port_file = get_config_directory() / PORT_FILE
    if port_file.exists():
        port_file.unlink()
        logger.info("Port file cleaned up")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Dev Toolkit Server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                        help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--debug', action='store_true',
                        help='Run Flask in debug mode with the reloader')
    parser.add_argument('--log-level', default=None,
                        help='Logging level (default: from config, else INFO)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    log_config = get_section('logging')
    setup_logging(args.log_level or log_config.get('level', 'INFO'), log_config.get('file'))

    # Imported after logging is configured so module loggers pick it up
    from .main import create_app
    app = create_app()

    write_port_file(args.port)
    try:
        logger.info("Starting Dev Toolkit on http://%s:%s", args.host, args.port)
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        cleanup_port_file()


if __name__ == '__main__':
    main()
