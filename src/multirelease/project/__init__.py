"""Readers and writers for managed project layouts."""

from __future__ import annotations

from multirelease.project.gradle import GradleProjectReader, GradleProjectWriter

__all__ = ["GradleProjectReader", "GradleProjectWriter"]
