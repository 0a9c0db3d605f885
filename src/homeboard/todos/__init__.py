"""
To-do subsystem.

Components:
- todo_models.py: data structures (TodoItem, Priority, StatusFilter, SortOption)
- todo_ops.py: pure list operations (add/toggle/delete/priority/clear)
- todo_store.py: stateful list + category set with write-through persistence
- todo_view.py: filtered/sorted projection for rendering
"""
