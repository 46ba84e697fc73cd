"""
Task subsystem.

Components:
- task_errors.py: failure taxonomy (TaskError and subclasses)
- task_models.py: data structures (Task, Priority, Status) + line codec
- task_store.py: in-memory store with store-owned id assignment
- task_storage.py: flat-file persistence (one encoded task per line)
- task_api.py: small high-level helpers used by the command layer
"""
