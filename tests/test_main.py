import unittest
import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

from devtoolkit import __version__
from devtoolkit.cli import build_parser, main, write_port_file, cleanup_port_file, PORT_FILE
from devtoolkit.config.settings import reload_config
from devtoolkit.config.tools import TOOLS
from devtoolkit.logging_config import setup_logging, LOGGER_NAME
from devtoolkit.main import create_app


class TestMain(unittest.TestCase):
    def setUp(self):
        self.app = create_app().test_client()
        self.config_dir = Path(os.environ['DEVTOOLKIT_CONFIG_DIR'])

    def disable_tools(self, *tool_ids):
        config = {'tools': {tool_id: {'enabled': False} for tool_id in tool_ids}}
        (self.config_dir / 'config.json').write_text(json.dumps(config))
        reload_config()

    def test_dashboard(self):
        response = self.app.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Dev Toolkit', response.data)
        self.assertIn(b'JSON Tool', response.data)

    def test_dashboard_hides_disabled_tools(self):
        self.disable_tools('json-tool')
        response = self.app.get('/')
        self.assertNotIn(b'JSON Tool', response.data)

    def test_api_tools(self):
        response = self.app.get('/api/tools')
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.data)
        self.assertEqual(len(data['tools']), len(TOOLS))
        self.assertEqual(set(data['tools'][0]),
                         {'id', 'name', 'description', 'path', 'tags', 'category', 'icon'})

    def test_api_tools_disabled(self):
        self.disable_tools('json-tool', 'homebrew')
        data = json.loads(self.app.get('/api/tools').data)
        ids = [tool['id'] for tool in data['tools']]
        self.assertNotIn('json-tool', ids)
        self.assertNotIn('homebrew', ids)
        self.assertEqual(len(ids), len(TOOLS) - 2)

    def test_tool_ids_unique(self):
        ids = [tool['id'] for tool in TOOLS]
        self.assertEqual(len(ids), len(set(ids)))

    def test_health(self):
        response = self.app.get('/health')
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.data)
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['version'], __version__)
        self.assertIn('timestamp', data)
        self.assertEqual(data['tools_count'], len(TOOLS))

    def test_unknown_route(self):
        self.assertEqual(self.app.get('/api/nope').status_code, 404)

    def test_api_convert_no_data(self):
        response = self.app.post('/api/convert', json={})
        self.assertEqual(response.status_code, 400)
        data = json.loads(response.data)
        self.assertFalse(data['success'])
        self.assertEqual(data['error'], 'No data provided')


class TestCli(unittest.TestCase):
    def setUp(self):
        self.config_dir = Path(os.environ['DEVTOOLKIT_CONFIG_DIR'])

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual(args.port, 8000)
        self.assertEqual(args.host, '127.0.0.1')
        self.assertFalse(args.debug)
        self.assertIsNone(args.log_level)

    def test_port_file(self):
        write_port_file(8123)
        port_file = self.config_dir / PORT_FILE
        self.assertEqual(port_file.read_text(), '8123')

        cleanup_port_file()
        self.assertFalse(port_file.exists())
        # Cleaning up twice is harmless
        cleanup_port_file()

    @patch('flask.Flask.run')
    def test_main_runs_and_cleans_up(self, mock_run):
        seen = {}
        mock_run.side_effect = lambda **kwargs: seen.update(
            port_file=(self.config_dir / PORT_FILE).read_text(), **kwargs)

        main(['--port', '9001', '--log-level', 'WARNING'])

        self.assertEqual(seen['port_file'], '9001')
        self.assertEqual(seen['port'], 9001)
        self.assertEqual(seen['host'], '127.0.0.1')
        self.assertFalse((self.config_dir / PORT_FILE).exists())

    @patch('flask.Flask.run', side_effect=KeyboardInterrupt)
    def test_main_interrupted(self, mock_run):
        main(['--port', '9002'])
        self.assertFalse((self.config_dir / PORT_FILE).exists())


class TestLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger(LOGGER_NAME)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_level_from_string(self):
        setup_logging('debug')
        logger = logging.getLogger(LOGGER_NAME)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        self.assertEqual(len(logging.getLogger(LOGGER_NAME).handlers), 1)

    def test_log_file(self):
        log_file = Path(os.environ['DEVTOOLKIT_CONFIG_DIR']) / 'toolkit.log'
        setup_logging('INFO', str(log_file))
        logging.getLogger(LOGGER_NAME + '.test').info('hello from test')
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()
        self.assertIn('hello from test', log_file.read_text())


if __name__ == '__main__':
    unittest.main()
