"""End-to-end harness for the content-authoring API.

The package holds the pieces behave scenarios build on: configuration, the
`queryDatabase`/`updateEnvFile` tasks and their registry, the HTTP client,
fixture loading, and response-shape assertions. Scenarios themselves live in
`tests/integration/features/`.
"""

from __future__ import annotations

from content_e2e.config import E2EConfig, load_config
from content_e2e.tasks import TaskRegistry, build_default_registry

__all__ = ["E2EConfig", "load_config", "TaskRegistry", "build_default_registry"]
