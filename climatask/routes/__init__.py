# Routes package init
"""
ClimaTask Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:    GET  /                         (liveness message)
                    GET  /health                   (readiness probe)
    - users.py:     POST/GET /users, GET/PUT/DELETE /users/{id}, POST /login
    - locations.py: POST/GET /locations, GET/PUT/DELETE /locations/{id},
                    GET  /users/{id}/locations
    - tasks.py:     POST/GET /tasks, GET/PUT/DELETE /tasks/{id},
                    GET  /tasks/user/{userId}
    - climate.py:   GET  /climate                  (Open-Meteo proxy)

Design Principle:
    Routes are THIN: they parse the request, call one service method and
    declare the response model. Business rules live in services/.
"""
