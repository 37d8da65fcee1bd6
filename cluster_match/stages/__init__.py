"""Pipeline stages: clustering, matching, and the orchestrator that chains them."""
