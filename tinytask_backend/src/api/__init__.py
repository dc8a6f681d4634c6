"""
TinyTask backend package.

Modules:
- models / repositories / service: the in-memory task store and its rules
- errors: domain exceptions raised by the service
- main: the FastAPI application (create_app, app, run)
"""
