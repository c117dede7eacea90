# src/collection/__init__.py — v1
