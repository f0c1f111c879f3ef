"""
Task subsystem.

Components:
- action_queue.py: ActionQueue, disciplines, ActionResult/RunResult, drain_queue
- queue_worker.py: async polling worker that drains a queue
- actions.py: capture/review actions over a Workspace
"""
