# src/render/__init__.py — v1
