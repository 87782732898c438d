"""
Application Layer for the workout service.

This package contains:
- ports/: Repository interfaces (what the use cases need)
- use_cases/: WorkoutGateway, the single entry point for workout CRUD
- exceptions: Not-found, store and configuration failures
"""
