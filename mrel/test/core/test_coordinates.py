"""Tests for mrel.core.coordinates module."""

from __future__ import annotations

import pytest

from mrel.core.coordinates import ARTIFACT_TYPE_POM, ArtifactCoordinates


class TestArtifactCoordinates:
    def test_default_type_is_pom(self) -> None:
        coords = ArtifactCoordinates("com.example", "core", "1.0.0")
        assert coords.type == ARTIFACT_TYPE_POM

    def test_str(self) -> None:
        coords = ArtifactCoordinates("com.example", "core", "1.0.0", "jar")
        assert str(coords) == "com.example:core:jar:1.0.0"

    def test_module_key_ignores_version(self) -> None:
        a = ArtifactCoordinates("com.example", "core", "1.0.0")
        b = ArtifactCoordinates("com.example", "core", "2.0.0-SNAPSHOT")
        assert a.module_key == b.module_key == ("com.example", "core")

    def test_with_type(self) -> None:
        jar = ArtifactCoordinates("com.example", "core", "1.0.0", "jar")
        pom = jar.with_type("pom")
        assert pom.type == "pom"
        assert jar.type == "jar"
        assert pom.version == jar.version

    def test_frozen_and_hashable(self) -> None:
        coords = ArtifactCoordinates("g", "a", "1")
        with pytest.raises(AttributeError):
            coords.version = "2"  # type: ignore[misc]
        assert {coords, ArtifactCoordinates("g", "a", "1")} == {coords}
