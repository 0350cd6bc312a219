# tests/property/engine/__init__.py
