"""
Flask application: dashboard, tool registry, health check and one blueprint
per tool group.
"""

import logging
from datetime import datetime

from flask import Flask, render_template_string, jsonify

from . import __version__
from .blueprints import ALL_BLUEPRINTS
from .config.tools import TOOLS, get_enabled_tools

logger = logging.getLogger(__name__)

DASHBOARD_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Dev Toolkit</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            color: #333;
        }
        .header { text-align: center; padding: 40px 20px; color: white; }
        .header h1 { font-size: 3em; font-weight: 300; margin-bottom: 10px; }
        .container { max-width: 1200px; margin: 0 auto; padding: 0 20px; }
        .category { color: white; margin: 30px 0 15px; text-transform: capitalize; }
        .tools-grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
            gap: 20px;
        }
        .tool-card {
            background: white;
            border-radius: 15px;
            padding: 25px;
            box-shadow: 0 8px 25px rgba(0,0,0,0.1);
        }
        .tool-card h3 { margin-bottom: 8px; }
        .tool-card code { font-size: 0.85em; color: #764ba2; }
        .tags { margin-top: 10px; }
        .tag {
            display: inline-block;
            background: #f0f0f5;
            border-radius: 10px;
            padding: 2px 8px;
            margin: 2px;
            font-size: 0.8em;
        }
    </style>
</head>
<body>
    <div class="header">
        <h1>Dev Toolkit</h1>
        <p>{{ tools|length }} developer tools, all running locally</p>
    </div>
    <div class="container">
        {% for category, items in tools|groupby('category') %}
        <h2 class="category">{{ category }}</h2>
        <div class="tools-grid">
            {% for tool in items %}
            <div class="tool-card">
                <h3>{{ tool.icon }} {{ tool.name }}</h3>
                <p>{{ tool.description }}</p>
                <code>{{ tool.path }}</code>
                <div class="tags">
                    {% for tag in tool.tags %}<span class="tag">{{ tag }}</span>{% endfor %}
                </div>
            </div>
            {% endfor %}
        </div>
        {% endfor %}
    </div>
</body>
</html>
'''


def create_app() -> Flask:
    app = Flask(__name__)

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)
    logger.debug("Registered %d blueprints", len(ALL_BLUEPRINTS))

    @app.route('/')
    def dashboard():
        return render_template_string(DASHBOARD_TEMPLATE, tools=get_enabled_tools(TOOLS))

    @app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(TOOLS)})

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'healthy',
            'version': __version__,
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(get_enabled_tools(TOOLS)),
        })

    return app
