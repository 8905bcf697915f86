"""
Tests for the Homebrew manager with the brew executable patched out.
"""

import json
from unittest.mock import patch

import pytest

from devtoolkit.api import homebrew as brew
from devtoolkit.api.homebrew import parse_search_output, parse_doctor_output
from devtoolkit.bridge.base import CommandOutput
from devtoolkit.bridge.exceptions import (
    BridgeCommandError, BridgeTimeoutError, BridgeValidationError, CommandNotFoundError,
)

RUN_BREW = 'devtoolkit.api.homebrew.run_brew'

INSTALLED_FORMULAE = {
    'formulae': [
        {
            'name': 'wget',
            'full_name': 'wget',
            'desc': 'Internet file retriever',
            'homepage': 'https://www.gnu.org/software/wget/',
            'installed': [{'version': '1.21.4', 'installed_on_request': True}],
            'outdated': True,
            'pinned': False,
        },
        {
            'name': 'openssl@3',
            'full_name': 'openssl@3',
            'installed': [{'version': '3.2.0', 'installed_on_request': False}],
            'pinned': True,
        },
    ]
}
INSTALLED_CASKS = {'casks': [{'token': 'Firefox', 'version': '121.0', 'desc': 'Web browser'}]}

OUTDATED_FORMULAE = {'formulae': [{'name': 'wget', 'installed_versions': ['1.21.3'], 'pinned': False}]}
OUTDATED_CASKS = {'casks': [{'name': 'firefox', 'installed_versions': '120.0'}]}

FORMULA_INFO = {
    'formulae': [{
        'name': 'jq',
        'full_name': 'jq',
        'desc': 'Lightweight and flexible command-line JSON processor',
        'homepage': 'https://jqlang.github.io/jq/',
        'license': 'MIT',
        'versions': {'stable': '1.7.1'},
        'dependencies': ['oniguruma'],
        'caveats': None,
        'installed': [{'version': '1.7.1'}],
        'outdated': False,
    }],
    'casks': [],
}
CASK_INFO = {
    'formulae': [],
    'casks': [{
        'token': 'firefox',
        'full_token': 'firefox',
        'version': '121.0',
        'desc': 'Web browser',
        'installed': '121.0',
        'outdated': False,
    }],
}

SEARCH_OUTPUT = """\
==> Formulae
jq                jql
jqp

==> Casks
jqbx
"""

DOCTOR_WARNINGS = """\
Please note that these warnings are just used to help the Homebrew maintainers
with debugging if you file an issue.

Warning: Some installed formulae are deprecated or disabled.
Warning: Unbrewed dylibs were found in /usr/local/lib.
"""


def ok(stdout=''):
    return CommandOutput(stdout=stdout, stderr='', success=True, returncode=0)


def failed(stderr='', returncode=1):
    return CommandOutput(stdout='', stderr=stderr, success=False, returncode=returncode)


def fake_brew(responses):
    """run_brew stand-in answering from a dict keyed by the joined arguments."""
    def run(args, timeout=None):
        return responses[' '.join(args)]
    return run


class TestStatus:

    @patch(RUN_BREW, return_value=ok('Homebrew 4.2.0\nHomebrew/homebrew-core (git revision 1a2b)\n'))
    def test_version(self, mock_brew):
        assert brew.is_installed() is True
        assert brew.version() == 'Homebrew 4.2.0'

    @patch(RUN_BREW, side_effect=CommandNotFoundError('Failed to execute brew command: brew is not installed'))
    def test_not_installed(self, mock_brew):
        assert brew.is_installed() is False

    @patch(RUN_BREW, return_value=failed())
    def test_version_failure(self, mock_brew):
        with pytest.raises(BridgeCommandError, match="Failed to get Homebrew version"):
            brew.version()


class TestListing:

    def test_installed_sorted_by_name(self):
        responses = {
            'list --formulae --json=v2': ok(json.dumps(INSTALLED_FORMULAE)),
            'list --casks --json=v2': ok(json.dumps(INSTALLED_CASKS)),
        }
        with patch(RUN_BREW, side_effect=fake_brew(responses)):
            packages = brew.list_installed()

        assert [p.name for p in packages] == ['Firefox', 'openssl@3', 'wget']
        wget = packages[2]
        assert wget.version == '1.21.4'
        assert wget.outdated is True
        assert wget.installed_on_request is True
        assert packages[1].pinned is True
        assert packages[1].installed_on_request is False
        assert packages[0].package_type == 'cask'

    def test_installed_ignores_bad_output(self):
        responses = {
            'list --formulae --json=v2': ok('not json'),
            'list --casks --json=v2': failed('Error: no casks'),
        }
        with patch(RUN_BREW, side_effect=fake_brew(responses)):
            assert brew.list_installed() == []

    def test_outdated(self):
        responses = {
            'outdated --formulae --json=v2': ok(json.dumps(OUTDATED_FORMULAE)),
            'outdated --casks --json=v2': ok(json.dumps(OUTDATED_CASKS)),
        }
        with patch(RUN_BREW, side_effect=fake_brew(responses)):
            packages = brew.list_outdated()

        assert [(p.name, p.version, p.package_type) for p in packages] == [
            ('wget', '1.21.3', 'formula'),
            ('firefox', '120.0', 'cask'),
        ]
        assert all(p.outdated for p in packages)


class TestSearch:

    def test_parse_sections(self):
        results = parse_search_output(SEARCH_OUTPUT)
        assert [(r.name, r.package_type) for r in results] == [
            ('jq', 'formula'), ('jql', 'formula'), ('jqp', 'formula'), ('jqbx', 'cask'),
        ]

    @patch(RUN_BREW, return_value=ok(SEARCH_OUTPUT))
    def test_search(self, mock_brew):
        assert len(brew.search(' jq ')) == 4
        mock_brew.assert_called_once_with(['search', 'jq'])

    @patch(RUN_BREW, return_value=failed('Error: No formulae or casks found for "zzz".'))
    def test_no_results(self, mock_brew):
        assert brew.search('zzz') == []

    @patch(RUN_BREW)
    def test_rejects_option_injection(self, mock_brew):
        with pytest.raises(BridgeValidationError):
            brew.search('--debug')
        mock_brew.assert_not_called()

    def test_empty_query(self):
        with pytest.raises(ValueError, match="Search query cannot be empty"):
            brew.search('  ')


class TestInfo:

    @patch(RUN_BREW, return_value=ok(json.dumps(FORMULA_INFO)))
    def test_formula(self, mock_brew):
        package = brew.info('jq')
        mock_brew.assert_called_once_with(['info', '--json=v2', 'jq'])
        assert package.version == '1.7.1'
        assert package.license == 'MIT'
        assert package.dependencies == ['oniguruma']
        assert package.installed is True

    @patch(RUN_BREW, return_value=ok(json.dumps(CASK_INFO)))
    def test_cask(self, mock_brew):
        package = brew.info('firefox', is_cask=True)
        mock_brew.assert_called_once_with(['info', '--json=v2', '--cask', 'firefox'])
        assert package.package_type == 'cask'
        assert package.installed is True

    @patch(RUN_BREW, return_value=failed('Error: No available formula with the name "nope".'))
    def test_unknown(self, mock_brew):
        with pytest.raises(BridgeCommandError, match="Package not found"):
            brew.info('nope')

    @patch(RUN_BREW, return_value=ok('{oops'))
    def test_bad_json(self, mock_brew):
        with pytest.raises(BridgeCommandError, match="Failed to parse JSON"):
            brew.info('jq')

    @patch(RUN_BREW, return_value=ok(json.dumps({'formulae': [], 'casks': []})))
    def test_empty_lists(self, mock_brew):
        with pytest.raises(BridgeCommandError, match="Package not found"):
            brew.info('jq')


class TestPackageCommands:

    @patch(RUN_BREW, return_value=ok('==> Pouring jq--1.7.1'))
    def test_install_cask(self, mock_brew):
        brew.install('firefox', is_cask=True)
        mock_brew.assert_called_once_with(['install', '--cask', 'firefox'])

    @patch(RUN_BREW, return_value=ok())
    def test_upgrade_all(self, mock_brew):
        brew.upgrade()
        mock_brew.assert_called_once_with(['upgrade'])

    @patch(RUN_BREW, return_value=ok())
    def test_cleanup_dry_run(self, mock_brew):
        brew.cleanup(dry_run=True)
        mock_brew.assert_called_once_with(['cleanup', '--dry-run'])

    @patch(RUN_BREW)
    def test_tap_requires_user_repo(self, mock_brew):
        with pytest.raises(BridgeValidationError):
            brew.tap('justaname')
        mock_brew.assert_not_called()

    @patch(RUN_BREW, return_value=ok('homebrew/cask\nmongodb/brew\n\n'))
    def test_list_taps(self, mock_brew):
        taps = brew.list_taps()
        assert [t.to_dict() for t in taps] == [
            {'name': 'homebrew/cask', 'remote': 'https://github.com/homebrew/cask.git', 'is_official': True},
            {'name': 'mongodb/brew', 'remote': 'https://github.com/mongodb/brew.git', 'is_official': False},
        ]


class TestDoctor:

    def test_ready_to_brew(self):
        result = parse_doctor_output('Your system is ready to brew.\n', '', True)
        assert result.is_healthy is True
        assert result.warnings == []

    def test_warnings(self):
        result = parse_doctor_output('', DOCTOR_WARNINGS, False)
        assert len(result.warnings) == 2
        assert result.is_healthy is False

    def test_errors(self):
        result = parse_doctor_output('', 'Error: Permission denied @ dir_s_mkdir', False)
        assert result.issues == ['Error: Permission denied @ dir_s_mkdir']


class TestHomebrewEndpoints:

    def test_status_without_brew(self, client):
        with patch(RUN_BREW, side_effect=CommandNotFoundError('brew is not installed')):
            response = client.get('/api/brew/status')
        assert response.get_json() == {'success': True, 'installed': False, 'version': None}

    @patch(RUN_BREW, return_value=ok('Homebrew 4.2.0\n'))
    def test_status(self, mock_brew, client):
        assert client.get('/api/brew/status').get_json()['version'] == 'Homebrew 4.2.0'

    def test_search_requires_query(self, client):
        response = client.get('/api/brew/search?q=')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Search query is required'

    @patch(RUN_BREW, return_value=ok(SEARCH_OUTPUT))
    def test_search(self, mock_brew, client):
        results = client.get('/api/brew/search?q=jq').get_json()['results']
        assert results[-1] == {'name': 'jqbx', 'package_type': 'cask', 'desc': None}

    @patch(RUN_BREW, return_value=ok(json.dumps(CASK_INFO)))
    def test_info_cask(self, mock_brew, client):
        response = client.get('/api/brew/info/firefox?cask=true')
        assert response.get_json()['package']['name'] == 'firefox'
        assert '--cask' in mock_brew.call_args[0][0]

    @patch(RUN_BREW, return_value=ok(json.dumps(FORMULA_INFO)))
    def test_info_tap_qualified_name(self, mock_brew, client):
        client.get('/api/brew/info/homebrew/core/jq')
        assert mock_brew.call_args[0][0][-1] == 'homebrew/core/jq'

    @patch(RUN_BREW, return_value=failed('Error: No available formula', returncode=1))
    def test_install_failure_reports_output(self, mock_brew, client):
        response = client.post('/api/brew/install', json={'name': 'nope'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['success'] is False
        assert data['output']['stderr'] == 'Error: No available formula'

    def test_install_no_body(self, client):
        assert client.post('/api/brew/install').status_code == 400

    def test_install_bad_name(self, client):
        response = client.post('/api/brew/install', json={'name': 'jq; rm -rf /'})
        assert response.status_code == 400

    @patch(RUN_BREW, return_value=ok())
    def test_upgrade_without_body(self, mock_brew, client):
        response = client.post('/api/brew/upgrade')
        assert response.get_json()['success'] is True
        mock_brew.assert_called_once_with(['upgrade'])

    @patch(RUN_BREW, side_effect=BridgeTimeoutError('brew timed out after 900 seconds'))
    def test_update_timeout(self, mock_brew, client):
        assert client.post('/api/brew/update').status_code == 504

    @patch(RUN_BREW, return_value=ok())
    def test_pin(self, mock_brew, client):
        client.post('/api/brew/pin', json={'name': 'wget'})
        mock_brew.assert_called_once_with(['pin', 'wget'])

    @patch(RUN_BREW, return_value=ok('Your system is ready to brew.'))
    def test_doctor(self, mock_brew, client):
        assert client.get('/api/brew/doctor').get_json()['result']['is_healthy'] is True
