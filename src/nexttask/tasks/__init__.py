"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, DependencyEdge)
- db.py: the shared SQLite file, schema and transactions
- task_store.py: task rows (create, status changes, listings, bulk delete)
- dependency_store.py: "depends on" edges between tasks
- classifier.py: inbox / next actions / projects derived from the graph
- tree.py: depth-bounded dependency tree rendering
- purge.py: removes resolved tasks and their edges in one transaction
"""
