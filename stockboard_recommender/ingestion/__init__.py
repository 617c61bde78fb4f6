"""Snapshot ingestion: JSON fixtures -> immutable engine inputs."""
