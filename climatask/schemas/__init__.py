# Schemas package init
"""
ClimaTask Backend — Pydantic Schemas
======================================

What:  API contracts, kept separate from the SQLAlchemy models so that only
       the projected fields (never the password hash) reach a client.

Modules:
    - common.py:   CamelModel base, ErrorResponse, HealthResponse, MessageResponse
    - user.py:     signup/update/login bodies, UserPublic
    - location.py: location bodies and responses
    - task.py:     task bodies and responses
    - weather.py:  reshaped forecast returned by /climate
"""
