# Services package init
"""
ClimaTask Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and repositories (persistence).
How:   Services take an AsyncSession and validated request models, apply the
       rules and return response projections. One instance of each lives on
       `app.state` and is injected into routes via FastAPI dependencies.

Service Inventory:
    - UserService:     signup, partial update with rehash, delete, login
    - LocationService: location CRUD, owner-embedded reads
    - TaskService:     task CRUD, newest-first lists
    - WeatherService:  Open-Meteo forecast fetch and reshaping
"""
