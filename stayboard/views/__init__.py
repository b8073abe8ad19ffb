"""View rendering module for HTML templates.

Views prepare context data (weather panel, converted prices) and render
Jinja2 templates, separate from the JSON API routers.
"""
