"""
Task subsystem.

Components:
- task_models.py: domain entities (Task, TaskKind, User) and status/overdue rules
- task_processor.py: pure query/aggregation helpers over task collections
- task_manager.py: loaded in-memory collections + guarded queries
"""
