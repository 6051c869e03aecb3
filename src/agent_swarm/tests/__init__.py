"""
Agent Swarm Test Package.

Test categories:
- test_config.py: Configuration and environment variable loading
- test_models.py: Pydantic model validation and custom pipeline toggling
- test_registry.py: Step and preset lookup
- test_agent_client.py: Messages API client and error mapping
- test_executor.py: Sequential execution, context chaining, cancellation
- test_history.py: Bounded run history
- test_session.py: Session projection, history recording, stop
- test_logging_utils.py: Structured and human-readable log formatting
- test_main.py: Command-line interface
"""

__all__ = []
