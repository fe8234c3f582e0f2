"""Shared test fixtures for the pom-manager test suite."""

import textwrap
from pathlib import Path

import pytest

from pom_manager.pom_models import (
    Build,
    Coordinates,
    Dependency,
    MavenProject,
    Plugin,
    PluginExecution,
)


@pytest.fixture
def tmp_pom(tmp_path):
    """Factory fixture that writes a pom.xml to a temp directory and returns the path."""
    def _write(content: str) -> Path:
        pom = tmp_path / "pom.xml"
        pom.write_text(textwrap.dedent(content), encoding="utf-8")
        return pom
    return _write


@pytest.fixture
def pom_bytes():
    """Dedent an inline POM snippet and encode it as UTF-8."""
    def _encode(content: str) -> bytes:
        return textwrap.dedent(content).encode("utf-8")
    return _encode


@pytest.fixture
def coords():
    return Coordinates("com.example", "my-app", "1.0.0")


@pytest.fixture
def simple_project():
    """A minimal valid project with two dependencies."""
    return MavenProject(
        group_id="com.example",
        artifact_id="demo",
        version="1.0.0",
        properties={"java.version": "21"},
        dependencies=[
            Dependency("org.slf4j", "slf4j-api", "2.0.9"),
            Dependency("org.junit.jupiter", "junit-jupiter", "5.10.0", scope="test"),
        ],
    )


@pytest.fixture
def project_with_executions():
    """A project whose plugins bind several executions to lifecycle phases."""
    return MavenProject(
        group_id="com.example",
        artifact_id="exec-demo",
        version="1.0.0",
        build=Build(plugins=[
            Plugin(
                "org.apache.maven.plugins", "maven-compiler-plugin", "3.11.0",
            ),
            Plugin(
                "org.jacoco", "jacoco-maven-plugin", "0.8.11",
                executions=[
                    PluginExecution("prepare", "initialize", ["prepare-agent"]),
                    PluginExecution("report", "verify", ["report", "check"]),
                ],
            ),
            Plugin(
                "org.apache.maven.plugins", "maven-surefire-plugin", "3.2.2",
                executions=[
                    PluginExecution("unit", "test", ["test"]),
                    PluginExecution("no-phase", None, ["help"]),
                ],
            ),
            Plugin(
                "org.codehaus.mojo", "exec-maven-plugin", "3.1.0",
                executions=[PluginExecution("late", "verify", ["exec"])],
            ),
        ]),
    )
