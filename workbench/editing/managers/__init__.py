"""Managers for the workbench editing core.

Managers compose the execution steps and raise domain exceptions
(``LookupError``, ``ValueError``, ``RuntimeError``), never HTTP exceptions --
that translation is the router's responsibility.
"""
