"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and error types
- dates.py: due date parsing/formatting
- task_store.py: in-memory store with JSON file persistence
"""
