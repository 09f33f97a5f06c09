# cemco2/__init__.py
"""
cemco2 package.

Keep this file side-effect free.
Do NOT import submodules here, otherwise importing any cemco2.* module will
trigger those imports and can cause circular/import-order errors.
"""

__all__ = []
