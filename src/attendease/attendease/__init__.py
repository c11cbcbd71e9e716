"""AttendEase attendance engine.

Feature modules (attendance, geofences, movement, reminders, ...) keep the same
layering: frozen dataclass models, Protocol repositories with MySQL
implementations, service classes with the business rules and a thin Flask
controller on top.
"""
