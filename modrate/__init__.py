"""
ModRate Backend

Local mirror of a mod registry's catalog, plus per-user ratings.

Package Structure:
==================
    modrate/
    ├── worker/     ← Catalog refresh worker
    ├── shared/     ← Models, repositories, services, adapters
    └── config/     ← Configuration

Running the Worker:
===================
    python -m modrate.worker.main
"""
