"""
tasklist - Terminal task list synchronized with a remote task API.

Architecture:
- providers.py: Data types + TaskAPI protocol (implementations can be swapped)
- api_provider.py: HTTP TaskAPI implementation
- rules.py: Pure cost/deadline/ordering helpers
- controller.py: Draft and task-list state, API synchronization
- views/: Textual screen/widget components
- app.py: Main application entry point
"""
