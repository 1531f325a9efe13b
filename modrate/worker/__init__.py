"""
Worker Module

Background catalog refresh.

    python -m modrate.worker.main [--force]
"""
