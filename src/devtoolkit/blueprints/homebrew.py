from flask import Blueprint, jsonify, request

from ..api import homebrew as brew
from .errors import request_data, flag, no_data, error_response

homebrew_bp = Blueprint('homebrew', __name__)


def _package_args(data):
    return data.get('name', ''), flag(data, 'is_cask', False)


def _command_response(output):
    """Mutating commands answer with the captured brew output."""
    return jsonify({'success': output.success, 'output': output.to_dict()})


@homebrew_bp.route('/api/brew/status', methods=['GET'])
def api_brew_status():
    try:
        installed = brew.is_installed()
        return jsonify({
            'success': True,
            'installed': installed,
            'version': brew.version() if installed else None,
        })

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/installed', methods=['GET'])
def api_brew_installed():
    try:
        packages = brew.list_installed()
        return jsonify({'success': True, 'packages': [p.to_dict() for p in packages]})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/outdated', methods=['GET'])
def api_brew_outdated():
    try:
        packages = brew.list_outdated()
        return jsonify({'success': True, 'packages': [p.to_dict() for p in packages]})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/search', methods=['GET'])
def api_brew_search():
    try:
        query = request.args.get('q', '').strip()
        if not query:
            raise ValueError("Search query is required")
        results = brew.search(query)
        return jsonify({'success': True, 'results': [r.to_dict() for r in results]})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/info/<path:name>', methods=['GET'])
def api_brew_info(name):
    try:
        is_cask = request.args.get('cask', '').lower() in ('1', 'true', 'yes')
        return jsonify({'success': True, 'package': brew.info(name, is_cask).to_dict()})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/install', methods=['POST'])
def api_brew_install():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.install(*_package_args(data)))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/uninstall', methods=['POST'])
def api_brew_uninstall():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.uninstall(*_package_args(data)))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/upgrade', methods=['POST'])
def api_brew_upgrade():
    """Upgrade one package, or every outdated package when no name is sent"""
    try:
        data = request_data() or {}
        name, is_cask = _package_args(data)
        return _command_response(brew.upgrade(name or None, is_cask))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/update', methods=['POST'])
def api_brew_update():
    try:
        return _command_response(brew.update())

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/taps', methods=['GET'])
def api_brew_taps():
    try:
        return jsonify({'success': True, 'taps': [t.to_dict() for t in brew.list_taps()]})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/tap', methods=['POST'])
def api_brew_tap():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.tap(data.get('name', '')))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/untap', methods=['POST'])
def api_brew_untap():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.untap(data.get('name', '')))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/doctor', methods=['GET'])
def api_brew_doctor():
    try:
        return jsonify({'success': True, 'result': brew.doctor().to_dict()})

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/cleanup', methods=['POST'])
def api_brew_cleanup():
    try:
        data = request_data() or {}
        return _command_response(brew.cleanup(flag(data, 'dry_run', False)))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/pin', methods=['POST'])
def api_brew_pin():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.pin(data.get('name', '')))

    except Exception as e:
        return error_response(e)


@homebrew_bp.route('/api/brew/unpin', methods=['POST'])
def api_brew_unpin():
    try:
        data = request_data()
        if not data:
            return no_data()
        return _command_response(brew.unpin(data.get('name', '')))

    except Exception as e:
        return error_response(e)
