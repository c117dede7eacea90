# src/authoring/__init__.py — v1
