"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - storage: Upload storage abstraction (Amazon S3, Google Cloud Storage, local filesystem)
    - container: Shared access to the configured storage adapter

This package enables:
    - Testing against in-memory object stores
    - Switching between providers without code changes
    - Loose coupling between upload code and storage providers
"""
