"""
Tool implementations. Each module is plain functions over strings and dicts;
the blueprints expose them over HTTP.
"""
