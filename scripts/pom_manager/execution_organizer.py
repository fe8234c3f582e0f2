"""Plugin execution indexes.

Read-only projections of a project's ``<build><plugins>`` executions, grouped
by phase, by ``artifactId:goal`` or by plugin. Nothing is cached; call again
after mutating the project.
"""

from typing import Optional

from .pom_constants import LIFECYCLE_PHASES
from .pom_models import MavenProject


def _plugins(project: Optional[MavenProject]) -> list:
    if project is None or project.build is None:
        return []
    return project.build.plugins


class ExecutionOrganizer:
    """Index a project's plugin executions by phase, goal or plugin."""

    def by_phase(self, project: Optional[MavenProject]) -> dict:
        """Map phase name to executions bound to it, in declaration order.

        Executions without a phase are left out. Phases are not checked
        against the lifecycle vocabulary.
        """
        result = {}
        for plugin in _plugins(project):
            for execution in plugin.executions:
                if execution.phase:
                    result.setdefault(execution.phase, []).append(execution)
        return result

    def by_goal(self, project: Optional[MavenProject]) -> dict:
        """Map ``"<plugin artifactId>:<goal>"`` to the executions declaring that goal."""
        result = {}
        for plugin in _plugins(project):
            for execution in plugin.executions:
                for goal in execution.goals:
                    result.setdefault(f"{plugin.artifact_id}:{goal}", []).append(execution)
        return result

    def by_plugin(self, project: Optional[MavenProject]) -> dict:
        """Map plugin artifactId to its executions; plugins without executions are absent."""
        result = {}
        for plugin in _plugins(project):
            if plugin.executions:
                result.setdefault(plugin.artifact_id, []).extend(plugin.executions)
        return result

    def get_phase_order(self) -> list:
        return list(LIFECYCLE_PHASES)
