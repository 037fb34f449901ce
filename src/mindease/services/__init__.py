"""
MindEase Services Layer

Stateless classifiers, the session store and reaper, and the
orchestrator that composes them per incoming message.
"""
