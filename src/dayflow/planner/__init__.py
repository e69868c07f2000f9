"""
Planner engine.

Components:
- calendar_math.py: pure date helpers (week start, date keys, display formats)
- relative.py: today/tomorrow/this week/next week classification and its inverse
- models.py: data structures (Task, Event, PlannerSnapshot, RelativeBucket)
- store.py: PlannerStore, the single owner of tasks, events and the cursor
- views.py: read-only projections (day, today, week strip, month grid)
- seed.py: first-run fixture data
"""
