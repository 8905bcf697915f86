"""
Service-status dashboard routes. Service descriptors are persisted by the
shared ServiceManager; refreshed metrics live only in memory.
"""

from flask import Blueprint, jsonify, request

from ..api.overwatch import get_service_manager
from .errors import request_data, text_value, no_data, bad_request, error_response

overwatch_bp = Blueprint('overwatch', __name__)


def _not_found(e: KeyError):
    return jsonify({'success': False, 'error': e.args[0] if e.args else 'Service not found'}), 404


def _with_data(manager, service):
    entry = service.to_dict()
    data = manager.get_service_data(service.id)
    entry['data'] = data.to_dict() if data else None
    return entry


@overwatch_bp.route('/api/overwatch/services', methods=['GET'])
def api_list_services():
    try:
        workspace_id = request.args.get('workspace_id', '').strip()
        if not workspace_id:
            return bad_request("workspace_id is required")

        manager = get_service_manager()
        provider = request.args.get('provider')
        if provider:
            services = manager.list_by_provider(workspace_id, provider)
        else:
            services = manager.list_by_workspace(workspace_id)
        return jsonify({'success': True, 'services': [_with_data(manager, s) for s in services]})

    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/services', methods=['POST'])
def api_add_service():
    try:
        data = request_data()
        if not data:
            return no_data()

        service = get_service_manager().add_service(data)
        return jsonify({'success': True, 'service': service.to_dict()}), 201

    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/services/<service_id>', methods=['PUT'])
def api_update_service(service_id):
    try:
        data = request_data()
        if not data:
            return no_data()

        service = get_service_manager().update_service(service_id, data)
        return jsonify({'success': True, 'service': service.to_dict()})

    except KeyError as e:
        return _not_found(e)
    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/services/<service_id>', methods=['DELETE'])
def api_delete_service(service_id):
    try:
        get_service_manager().delete_service(service_id)
        return jsonify({'success': True})

    except KeyError as e:
        return _not_found(e)
    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/services/reorder', methods=['POST'])
def api_reorder_services():
    try:
        data = request_data()
        if not data:
            return no_data()

        workspace_id = text_value(data, 'workspace_id')
        service_ids = data.get('service_ids')
        if not workspace_id or not isinstance(service_ids, list):
            return bad_request("workspace_id and service_ids are required")

        manager = get_service_manager()
        manager.reorder_services(workspace_id, service_ids)
        return jsonify({
            'success': True,
            'services': [s.to_dict() for s in manager.list_by_workspace(workspace_id)],
        })

    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/services/<service_id>/refresh', methods=['POST'])
def api_refresh_service(service_id):
    try:
        data = get_service_manager().refresh_service(service_id)
        return jsonify({'success': True, 'data': data.to_dict() if data else None})

    except KeyError as e:
        return _not_found(e)
    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/refresh', methods=['POST'])
def api_refresh_all():
    try:
        data = request_data()
        if not data:
            return no_data()

        workspace_id = text_value(data, 'workspace_id')
        if not workspace_id:
            return bad_request("workspace_id is required")

        results = get_service_manager().refresh_all(workspace_id)
        return jsonify({'success': True, 'results': [r.to_dict() for r in results]})

    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/provider-keys', methods=['GET'])
def api_provider_keys():
    """Which providers have a stored key; the keys themselves never leave the server"""
    manager = get_service_manager()
    return jsonify({'success': True, 'providers': sorted(manager.provider_api_keys)})


@overwatch_bp.route('/api/overwatch/provider-keys/<provider>', methods=['PUT'])
def api_set_provider_key(provider):
    try:
        data = request_data()
        if not data:
            return no_data()

        api_key = text_value(data, 'api_key')
        if not api_key:
            return bad_request("api_key is required")

        get_service_manager().set_provider_api_key(provider, api_key)
        return jsonify({'success': True, 'provider': provider})

    except Exception as e:
        return error_response(e)


@overwatch_bp.route('/api/overwatch/settings', methods=['GET'])
def api_get_settings():
    return jsonify({'success': True, 'settings': get_service_manager().get_settings()})


@overwatch_bp.route('/api/overwatch/settings', methods=['PUT'])
def api_update_settings():
    try:
        data = request_data()
        if not data:
            return no_data()

        manager = get_service_manager()
        manager.update_settings(data.get('auto_refresh'), data.get('refresh_interval'))
        return jsonify({'success': True, 'settings': manager.get_settings()})

    except Exception as e:
        return error_response(e)
