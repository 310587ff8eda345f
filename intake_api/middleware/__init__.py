# intake_api/middleware/__init__.py
"""
HTTP middleware: request ids and request/response logging.
"""
